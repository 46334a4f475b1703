"""Tests for zig-mcp.

Test package containing unit and integration tests for:
- Models (findings, generation inputs, configuration)
- Pattern tables, classifiers and compute estimation
- Requirement parsing and template generation
- Tools, MCP server (JSON-RPC handling) and remote collaborators
- CLI
"""
