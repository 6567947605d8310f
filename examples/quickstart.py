"""
md3kit Quick Start Example

This example shows the basic usage of md3kit: load a model, list its
surfaces and bake each one into a vertex animation texture.
"""

import os

from md3kit import ModelFile
from md3kit.format import name_to_str

os.makedirs("output", exist_ok=True)

mf = ModelFile.open("models/upper.md3")
print(f"Loaded {name_to_str(mf.model.name)} with {len(mf.model.frames)} frames")

for i, surface in enumerate(mf.model.surfaces):
    name = name_to_str(surface.name)
    grid = mf.save_animation(i, f"output/{name}.anim")
    print(f"✅ {name}: {grid.width}x{grid.height} saved to output/{name}.anim")

print("\nDone! Check the output/ directory for the baked animations.")
