"""
Punto de entrada: python -m tauri_automation
"""
from tauri_automation.server.mcp_server import main


if __name__ == "__main__":
    main()
