# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""Checkbox compliance gate for GitHub issues and pull requests.

This package implements the gate components including:
- Required-acknowledgement pattern validation
- Issue / pull request item handles over the GitHub REST API
- Hidden-marker comment lookup and upsert
- Guarded item state transitions
- GitHub Actions entry point (``python -m issuegate``)
"""

__version__ = "0.1.0"

__all__: list[str] = ["__version__"]
