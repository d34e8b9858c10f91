# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Notion adapter for the Model Context Protocol."""

__version__ = "1.0.0"
