"""tmplpack command line interface."""
