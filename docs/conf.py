import os
import sys

sys.path.insert(0, os.path.abspath(".."))

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

project = "mdns_plugin"
copyright = "2026, mdns_plugin"
author = "mdns_plugin"
release = "0.1"

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_rtd_theme",
]

exclude_patterns = [
    "_build",
    "Thumbs.db",
    ".DS_Store",
    "**/*_unittest.py",
]

# zeroconf and psutil are not needed to render the API reference.
autodoc_mock_imports = ["zeroconf", "psutil"]

# -- Options for HTML output -------------------------------------------------

html_theme = "sphinx_rtd_theme"
