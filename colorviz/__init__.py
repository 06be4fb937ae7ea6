from colorviz.__about__ import __application__, __version__  # noqa: F401
