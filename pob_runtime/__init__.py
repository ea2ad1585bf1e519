"""Path of Building runtime pieces: input, draw layers, meshes, textures and installation."""

__version__ = "0.1.2"