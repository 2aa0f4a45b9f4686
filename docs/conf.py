import os
import sys
from datetime import date

# Paths -----------------------------------------------------------------------
PROJECT_ROOT = os.path.abspath("..")
BACKEND_APP = os.path.join(PROJECT_ROOT, "backend", "app")
sys.path.insert(0, PROJECT_ROOT)

# Project information ---------------------------------------------------------
project = "Class Planner Reminders"
author = "Class Planner contributors"
copyright = f"{date.today().year}, {author}"

# General configuration -------------------------------------------------------
extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "autoapi.extension",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

myst_enable_extensions = ["colon_fence"]

# HTML output -----------------------------------------------------------------
html_theme = "sphinx_rtd_theme"

# AutoAPI (code reference) ----------------------------------------------------
autoapi_type = "python"
autoapi_dirs = [BACKEND_APP]
autoapi_root = "reference"
autoapi_ignore = ["*/tests/*"]
autoapi_add_toctree_entry = True

# Autodoc defaults ------------------------------------------------------------
autodoc_typehints = "description"
