"""
Servidor MCP (dispatcher de herramientas sobre stdio).
"""
from tauri_automation.server.mcp_server import create_server, main

__all__ = ["create_server", "main"]
