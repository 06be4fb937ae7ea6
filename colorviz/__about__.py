__application__ = "colorviz"
__version__ = "0.1.0"
