# Copyright 2026 dbmlparse Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for dbmlparse documentation."""

project = "dbmlparse"
author = "dbmlparse Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
