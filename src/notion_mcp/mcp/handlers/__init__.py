# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""MCP request handlers: tools, sampling, prompts, resources and notifications."""
