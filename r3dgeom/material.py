"""Surface materials and their construction from imported material properties."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from itertools import repeat
from typing import Any, Mapping

from .terrain import Image

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)

# Property keys understood by ``material_from_properties``.
DIFFUSE_COLOR = "color.diffuse"
BASE_COLOR = "color.base"
EMISSIVE_COLOR = "color.emissive"
OPACITY = "opacity"
TRANSPARENCY_FACTOR = "transparency_factor"
ROUGHNESS_FACTOR = "roughness_factor"
METALLIC_FACTOR = "metallic_factor"
TWO_SIDED = "two_sided"
TRANSMISSION_FACTOR = "transmission_factor"
BLEND_FUNC = "blend_func"
ALPHA_MODE = "$mat.gltf.alphaMode"
ALPHA_CUTOFF = "$mat.gltf.alphaCutoff"

TEXTURE_DIFFUSE = "texture.diffuse"
TEXTURE_BASE_COLOR = "texture.base_color"
TEXTURE_NORMALS = "texture.normals"
TEXTURE_EMISSIVE = "texture.emissive"
TEXTURE_AMBIENT_OCCLUSION = "texture.ambient_occlusion"
TEXTURE_DIFFUSE_ROUGHNESS = "texture.diffuse_roughness"
TEXTURE_SHININESS = "texture.shininess"
TEXTURE_METALNESS = "texture.metalness"

# Values of the BLEND_FUNC property.
BLEND_FUNC_DEFAULT = 0
BLEND_FUNC_ADDITIVE = 1


class BlendMode(Enum):
    OPAQUE = auto()
    ALPHA = auto()
    ADDITIVE = auto()


class CullMode(Enum):
    NONE = auto()
    BACK = auto()
    FRONT = auto()


class ShadowCastMode(Enum):
    DISABLED = auto()
    FRONT_FACES = auto()
    BACK_FACES = auto()
    ALL_FACES = auto()


class BillboardMode(Enum):
    DISABLED = auto()
    FRONT = auto()
    Y_AXIS = auto()


@dataclass(slots=True)
class Material:
    """A PBR material; a texture of ``None`` stands for the built-in default map."""

    albedo_color: Color = WHITE
    albedo_texture: str | None = None
    emission_color: Color = WHITE
    emission_energy: float = 0.0
    emission_texture: str | None = None
    normal_texture: str | None = None
    normal_scale: float = 1.0
    occlusion_texture: str | None = None
    roughness_texture: str | None = None
    roughness_from_shininess: bool = False
    metalness_texture: str | None = None
    occlusion: float = 1.0
    roughness: float = 1.0
    metalness: float = 0.0
    blend_mode: BlendMode = BlendMode.OPAQUE
    cull_mode: CullMode = CullMode.BACK
    shadow_cast_mode: ShadowCastMode = ShadowCastMode.FRONT_FACES
    billboard_mode: BillboardMode = BillboardMode.DISABLED
    alpha_cutoff: float = 0.01


def default_material() -> Material:
    """An opaque white, fully rough, non-metallic material."""
    return Material()


def color_from_floats(r: float, g: float, b: float, a: float) -> Color:
    """Convert 0..1 float channels to 8-bit channels, clamping and rounding half up."""
    def channel(value: float) -> int:
        return int(math.floor(min(max(float(value), 0.0), 1.0) * 255.0 + 0.5))

    return (channel(r), channel(g), channel(b), channel(a))


def _first(properties: Mapping[str, Any], *keys: str) -> Any:
    return next((properties[key] for key in keys if key in properties), None)


def material_from_properties(properties: Mapping[str, Any]) -> Material:
    """Build a material from imported properties, starting from the defaults."""
    mat = default_material()

    color = _first(properties, DIFFUSE_COLOR, BASE_COLOR)
    if color is not None:
        mat.albedo_color = color_from_floats(*color)

    if mat.albedo_color[3] == 255:
        opacity = 1.0
        # The transparency factor is only consulted when an opacity is given.
        if OPACITY in properties:
            opacity = float(properties[OPACITY])
            if TRANSPARENCY_FACTOR in properties:
                opacity = 1.0 - float(properties[TRANSPARENCY_FACTOR])
        alpha = min(255, max(0, int(255 * opacity)))
        mat.albedo_color = (*mat.albedo_color[:3], alpha)

    mat.albedo_texture = _first(properties, TEXTURE_DIFFUSE, TEXTURE_BASE_COLOR)
    mat.normal_texture = properties.get(TEXTURE_NORMALS)

    if EMISSIVE_COLOR in properties:
        mat.emission_color = color_from_floats(*properties[EMISSIVE_COLOR])
        mat.emission_energy = 1.0
    mat.emission_texture = properties.get(TEXTURE_EMISSIVE)
    if mat.emission_texture is not None:
        mat.emission_energy = 1.0

    mat.occlusion_texture = properties.get(TEXTURE_AMBIENT_OCCLUSION)
    if TEXTURE_DIFFUSE_ROUGHNESS in properties:
        mat.roughness_texture = properties[TEXTURE_DIFFUSE_ROUGHNESS]
    elif TEXTURE_SHININESS in properties:
        mat.roughness_texture = properties[TEXTURE_SHININESS]
        mat.roughness_from_shininess = True
    mat.metalness_texture = properties.get(TEXTURE_METALNESS)

    mat.roughness = float(properties.get(ROUGHNESS_FACTOR, 1.0))
    if METALLIC_FACTOR in properties:
        mat.metalness = float(properties[METALLIC_FACTOR])
    else:
        mat.metalness = 1.0 if mat.metalness_texture is not None else 0.0

    if properties.get(TWO_SIDED):
        mat.cull_mode = CullMode.NONE

    masked = False
    # 'BLEND' is deliberately ignored: it is often set on opaque materials.
    if properties.get(ALPHA_MODE) == "MASK":
        if ALPHA_CUTOFF in properties:
            mat.alpha_cutoff = float(properties[ALPHA_CUTOFF])
        masked = True

    transmission = float(properties.get(TRANSMISSION_FACTOR, 0.0))
    if masked or mat.albedo_color[3] < 255 or transmission > 0.01:
        mat.blend_mode = BlendMode.ALPHA
        mat.cull_mode = CullMode.NONE

    if BLEND_FUNC in properties:
        if properties[BLEND_FUNC] == BLEND_FUNC_ADDITIVE:
            mat.blend_mode = BlendMode.ADDITIVE
        else:
            mat.blend_mode = BlendMode.ALPHA
        mat.cull_mode = CullMode.NONE

    return mat


_OPAQUE_WHITE = (255, 255, 255, 255)


def pack_orm(
    occlusion: Image | None,
    roughness: Image | None,
    metalness: Image | None,
    width: int,
    height: int,
) -> bytes:
    """Pack occlusion (red), roughness (green) and metalness (blue) into RGB bytes.

    A missing component reads as 255 everywhere.
    """
    components = (occlusion, roughness, metalness)
    if all(image is None for image in components):
        raise ValueError("an ORM map needs at least one component image")
    if width <= 0 or height <= 0:
        raise ValueError(f"an ORM map needs a positive size, got {width}x{height}")
    for image in components:
        if image is not None and (image.width, image.height) != (width, height):
            raise ValueError(
                f"component is {image.width}x{image.height}, expected {width}x{height}"
            )

    sources = [image.pixels if image is not None else repeat(_OPAQUE_WHITE) for image in components]
    packed = bytearray()
    for o, r, m in zip(*sources):
        packed += bytes((o[0], r[1], m[2]))
    return bytes(packed)