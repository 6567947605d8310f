"""
Core md3kit API

Provides the ModelFile class for loading an MD3 file and baking its surfaces
into vertex animation grids.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from md3kit.animation.negotiation import fit_to_max_size
from md3kit.animation.packer import PixelGrid, pack
from md3kit.format.names import name_to_str
from md3kit.format.reader import read_md3
from md3kit.format.types import Model, Surface
from md3kit.schema.summary import AnimationSummary, ModelSummary, summarize
from md3kit.texturing.preview import render_preview

logger = logging.getLogger(__name__)

# Common GL_MAX_TEXTURE_SIZE on desktop GPUs
DEFAULT_MAX_TEXTURE_SIZE = 16384

SurfaceKey = Union[int, str]


@dataclass
class ModelFile:
    """
    A decoded MD3 file.

    Attributes:
        path: Source file path
        model: Decoded model

    Examples:
        >>> mf = ModelFile.open("models/players/sarge/upper.md3")
        >>> grid = mf.bake("u_torso")
        >>> mf.save_animation("u_torso", "torso.anim")
    """
    path: str
    model: Model

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> "ModelFile":
        """
        Load and decode an MD3 file.

        Raises:
            FileNotFoundError: If the file does not exist
            MD3Error: If the file is not a valid MD3 model
        """
        path = str(path)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Model file not found: {path}")
        model = read_md3(path)
        logger.info(f"Loaded {path}: {len(model.surfaces)} surfaces")
        return cls(path=path, model=model)

    def surface(self, key: SurfaceKey = 0) -> Surface:
        """
        Look up a surface by index or by its (printable) name.

        Raises:
            KeyError: If no surface matches
        """
        surfaces = self.model.surfaces
        if isinstance(key, int):
            if not 0 <= key < len(surfaces):
                raise KeyError(f"Surface index {key} out of range ({len(surfaces)} surfaces)")
            return surfaces[key]
        for surface in surfaces:
            if name_to_str(surface.name) == key:
                return surface
        names = ", ".join(name_to_str(s.name) for s in surfaces)
        raise KeyError(f"No surface named {key!r}. Available: {names}")

    def summary(self) -> ModelSummary:
        return summarize(self.model)

    def bake(
        self,
        key: SurfaceKey = 0,
        max_size: int = DEFAULT_MAX_TEXTURE_SIZE,
        workers: Optional[int] = None,
    ) -> PixelGrid:
        """Pack a surface, narrowing the grid until it fits max_size"""
        return fit_to_max_size(self.surface(key), max_size, workers=workers)

    def save_animation(
        self,
        key: SurfaceKey,
        path: Union[str, os.PathLike],
        max_size: int = DEFAULT_MAX_TEXTURE_SIZE,
        workers: Optional[int] = None,
    ) -> PixelGrid:
        """
        Bake a surface and write the raw grid plus a JSON sidecar.

        The sidecar (same path with a .json suffix) records the grid geometry
        and byte order so the data can be reinterpreted elsewhere.

        Returns:
            The grid that was written
        """
        path = Path(path)
        if path.suffix.lower() == '.json':
            raise ValueError(f"Animation output cannot be a .json file (used for the sidecar): {path}")

        surface = self.surface(key)
        grid = fit_to_max_size(surface, max_size, workers=workers)

        sidecar = AnimationSummary(
            surface=name_to_str(surface.name),
            width=grid.width,
            height=grid.height,
            rows_per_frame=grid.rows_per_frame,
            frames=grid.frames,
            vertices=grid.vertices,
            byteorder=grid.byteorder,
        )
        try:
            path.write_bytes(grid.data)
            with open(path.with_suffix('.json'), 'w') as f:
                json.dump(sidecar.model_dump(), f, indent=2)
        except OSError as e:
            logger.error(f"Failed to write animation to {path}: {e}")
            # A grid without its sidecar cannot be reinterpreted
            if path.is_file():
                path.unlink()
            raise

        logger.info(f"Saved {grid.width}x{grid.height} animation to {path}")
        return grid

    def save_preview(
        self,
        key: SurfaceKey,
        path: Union[str, os.PathLike],
        width: Optional[int] = None,
        scale: int = 1,
    ) -> PixelGrid:
        """Pack a surface at a fixed width and save a PNG preview of it"""
        grid = pack(self.surface(key), width)
        render_preview(grid, scale).save(str(path), format='PNG')
        logger.info(f"Saved preview to {path}")
        return grid
