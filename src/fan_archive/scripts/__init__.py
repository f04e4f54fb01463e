"""Command-line utilities for operating a Fan Archive deployment."""
