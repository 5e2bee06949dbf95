"""
BenriQR - SVG Renderer
========================
Render a QR module matrix as SVG markup through ``qrcode.image.svg``.
"""

from decimal import Decimal
from math import ceil
from typing import Sequence

from qrcode.image.svg import SvgPathImage

from benri_qr.constants import (
    DEFAULT_MIN_WIDTH,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_DARK_COLOR,
)
from benri_qr.errors import RenderError


class PixelSvgPathImage(SvgPathImage):
    """
    ``SvgPathImage`` measured in pixels, with per-image colors.

    The stock image maps a box size of 10 to 1mm; here one box unit is one
    pixel so ``width``/``height`` match the requested minimum dimensions.
    """

    def __init__(self, *args, light: str = DEFAULT_LIGHT_COLOR, dark: str = DEFAULT_DARK_COLOR, **kwargs):
        self.background = light
        self.QR_PATH_STYLE = {**SvgPathImage.QR_PATH_STYLE, "fill": dark}
        super().__init__(*args, **kwargs)

    def units(self, pixels, text=True):
        if not text:
            return Decimal(pixels)
        return str(int(pixels))

    def process(self):
        super().process()
        # Several images share one HTML document
        self.path.attrib.pop("id", None)


class SvgRenderer:
    """
    SVG renderer with minimum dimensions and two flat colors.

    Every module is drawn as a square of ``unit`` pixels, ``unit`` being the
    smallest integer for which the image reaches both minimum dimensions.
    The image is therefore square and may be larger than requested.

    Examples:
        >>> renderer = SvgRenderer(128, 128, light="white", dark="black")
        >>> svg = renderer.render(matrix)
    """

    image_factory = PixelSvgPathImage

    def __init__(
        self,
        min_width: int = DEFAULT_MIN_WIDTH,
        min_height: int = DEFAULT_MIN_HEIGHT,
        light: str = DEFAULT_LIGHT_COLOR,
        dark: str = DEFAULT_DARK_COLOR
    ):
        if min_width < 1 or min_height < 1:
            raise RenderError(
                f"Minimum dimensions must be positive, got {min_width}x{min_height}",
                details={"width": min_width, "height": min_height}
            )
        self.min_width = min_width
        self.min_height = min_height
        self.light = light
        self.dark = dark

    def unit_size(self, modules: int) -> int:
        """Side of one module in pixels for a matrix of ``modules`` per side"""
        return max(
            ceil(self.min_width / modules),
            ceil(self.min_height / modules),
            1,
        )

    def render(self, matrix: Sequence[Sequence[bool]]) -> str:
        """
        Render ``matrix`` (True = dark module, quiet zone included).

        Returns:
            str: ``<svg>`` element

        Raises:
            RenderError: If the matrix is empty or not square
        """
        size = len(matrix)
        if size == 0 or any(len(row) != size for row in matrix):
            raise RenderError(
                "Symbol matrix must be square and non-empty",
                details={"rows": size}
            )

        # The quiet zone is part of the matrix, so the image adds no border
        image = self.image_factory(
            0,
            size,
            self.unit_size(size),
            qrcode_modules=matrix,
            light=self.light,
            dark=self.dark,
            **{"shape-rendering": "crispEdges"},
        )
        for row in range(size):
            for col in range(size):
                image.module_drawer.drawrect(
                    image.pixel_box(row, col),
                    bool(matrix[row][col])
                )
        image.process()

        return image.to_string(encoding="unicode")


__all__ = ["SvgRenderer", "PixelSvgPathImage"]
