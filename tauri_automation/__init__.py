"""
Servidor MCP para automatizar aplicaciones Tauri via tauri-driver.
"""

__version__ = "1.0.0"
