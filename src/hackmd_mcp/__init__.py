"""HackMD MCP — expose the HackMD API as Model Context Protocol tools."""

__version__ = "1.4.0"
