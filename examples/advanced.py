"""
md3kit Advanced Example

This example drives width negotiation with a custom upload callable, the
way a renderer reports that a texture is too large for the GPU, and
attaches an object to a tag between two frames.
"""

import os

from md3kit import ModelFile, fit_to_limit
from md3kit.animation import TextureTooLargeError
from md3kit.format import interpolate_tag, name_to_str
from md3kit.texturing import render_preview

GPU_LIMIT = 256

mf = ModelFile.open("models/upper.md3")
surface = mf.surface(0)


def upload(grid):
    # Stand-in for a glTexImage2D call that fails with GL_INVALID_VALUE
    if grid.width > GPU_LIMIT or grid.height > GPU_LIMIT:
        raise TextureTooLargeError(f"{grid.width}x{grid.height} exceeds {GPU_LIMIT}")
    return f"texture<{grid.width}x{grid.height}>"


print("--- Negotiating upload ---")
handle, grid = fit_to_limit(surface, upload)
print(f"Uploaded {handle} with {grid.rows_per_frame} rows per frame")

print("\n--- Tag attachment ---")
for i, tag_name in enumerate(mf.model.tag_names()):
    origin, axes = interpolate_tag(mf.model, i, 1.5)
    print(f"{name_to_str(tag_name)} at frame 1.5: origin={origin.round(2).tolist()}")

print("\n--- Preview ---")
os.makedirs("output", exist_ok=True)
render_preview(grid, scale=2).save("output/preview.png")
print("✅ Saved output/preview.png")
