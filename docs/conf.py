# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import sys
from importlib.metadata import version

sys.path.insert(0, os.path.abspath("../src"))

# -- Project information -----------------------------------------------------

project = "kvlog"
copyright = "2025, Kimberly Wilber"
author = "Kimberly Wilber"
release = version("kvlog")
version = version("kvlog")

# -- General configuration ---------------------------------------------------

extensions = [
    "autoclasstoc",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.intersphinx",
    "sphinx.ext.autosummary",
    "sphinxcontrib.autodoc_pydantic",
]

autodoc_default_options = {
    "members": True,
    "undoc-members": True,
    "exclude-members": "__weakref__",
}

autodoc_typehints = "both"
autosummary_generate = True

# Google-style docstrings
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True

# Options is a pydantic model
autodoc_pydantic_model_show_json = False
autodoc_pydantic_model_show_config_summary = False

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "structlog": ("https://www.structlog.org/en/stable/", None),
    "pydantic": ("https://docs.pydantic.dev/latest/", None),
}

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]
html_theme = "sphinx_rtd_theme"
html_static_path = ["_static"]

if not os.path.exists("_static"):
    os.makedirs("_static")
