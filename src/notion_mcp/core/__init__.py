# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Core building blocks: configuration, errors, logging, validation, templating."""
