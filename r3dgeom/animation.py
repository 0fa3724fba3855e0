"""Skeletal animation: keyframe interpolation and baking of per-frame bone poses."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .importer import BoneInfo
from .scene import QuatKey, Scene, SceneAnimation, SceneNode, VectorKey
from .vecmath import (
    Matrix,
    Quat,
    Vec3,
    identity_matrix,
    scale_matrix,
    slerp,
    translate_matrix,
)

logger = logging.getLogger(__name__)

DEFAULT_TICKS_PER_SECOND = 25.0


@dataclass(slots=True)
class ModelAnimation:
    """An animation baked into one list of global bone transforms per frame."""

    name: str
    frame_count: int = 0
    bones: list[BoneInfo] = field(default_factory=list)
    frame_poses: list[list[Matrix]] = field(default_factory=list)

    @property
    def bone_count(self) -> int:
        return len(self.bones)


def _bracket(times: Sequence[float], time: float) -> int | None:
    """Index of the key that starts the interval holding ``time``; None past the last key."""
    return next((i for i in range(len(times) - 1) if time < times[i + 1]), None)


def interpolate_vec3(keys: Sequence[VectorKey], time: float) -> Vec3:
    """Linear interpolation of vector keys, held at the last key after the end."""
    if not keys:
        raise ValueError("cannot interpolate without keys")
    if len(keys) == 1:
        return keys[0].value
    index = _bracket([key.time for key in keys], time)
    if index is None:
        return keys[-1].value
    first, second = keys[index], keys[index + 1]
    delta = second.time - first.time
    if delta == 0.0:
        return first.value
    return first.value.lerp(second.value, (time - first.time) / delta)


def interpolate_quat(keys: Sequence[QuatKey], time: float) -> Quat:
    """Spherical interpolation of rotation keys, held at the last key after the end."""
    if not keys:
        raise ValueError("cannot interpolate without keys")
    if len(keys) == 1:
        return keys[0].value
    index = _bracket([key.time for key in keys], time)
    if index is None:
        return keys[-1].value
    first, second = keys[index], keys[index + 1]
    delta = second.time - first.time
    if delta == 0.0:
        return first.value
    return slerp(first.value, second.value, (time - first.time) / delta)


def node_transform_at_time(animation: SceneAnimation, node_name: str, time: float) -> Matrix:
    """The local transform of a node at ``time`` ticks; identity if the node is not animated."""
    channel = animation.channel(node_name)
    if channel is None:
        return identity_matrix()
    position = interpolate_vec3(channel.position_keys, time)
    rotation = interpolate_quat(channel.rotation_keys, time)
    scale = interpolate_vec3(channel.scaling_keys, time)
    return (
        scale_matrix(scale.x, scale.y, scale.z)
        .multiply(rotation.to_matrix())
        .multiply(translate_matrix(position.x, position.y, position.z))
    )


def global_transforms(
    node: SceneNode,
    animation: SceneAnimation,
    time: float,
    parent: Matrix,
    bone_names: Sequence[str],
) -> list[Matrix]:
    """Global transform of each named bone at ``time``; bones not in the graph stay identity.

    A node whose animated transform is the identity keeps its bind transform.
    """
    index: dict[str, int] = {}
    for i, name in enumerate(bone_names):
        index.setdefault(name, i)

    result = [identity_matrix() for _ in bone_names]
    stack: list[tuple[SceneNode, Matrix]] = [(node, parent)]
    while stack:
        current, parent_transform = stack.pop()
        local = node_transform_at_time(animation, current.name, time)
        if local.is_identity():
            local = current.transformation
        world = local.multiply(parent_transform)
        bone = index.get(current.name)
        if bone is not None:
            result[bone] = world
        stack.extend((child, world) for child in reversed(current.children))
    return result


def process_animation(
    scene: Scene, animation: SceneAnimation, target_frame_rate: int
) -> ModelAnimation:
    """Bake ``animation`` at ``target_frame_rate`` frames per second."""
    if target_frame_rate <= 0:
        raise ValueError(f"frame rate must be positive, got {target_frame_rate}")
    if scene.root is None:
        raise ValueError("scene has no root node")

    ticks_per_second = animation.ticks_per_second or DEFAULT_TICKS_PER_SECOND
    duration_seconds = animation.duration / ticks_per_second
    frame_count = int(duration_seconds * target_frame_rate + 0.5)
    result = ModelAnimation(animation.name[:31], frame_count)

    logger.info(
        "animation '%s' - duration: %.2fs, frames: %d",
        result.name, duration_seconds, frame_count,
    )

    names = scene.unique_bone_names()
    if not names:
        raise ValueError(f"no bones found for animation '{result.name}'")

    result.bones = list({bone.name: bone for bone in map(BoneInfo, names)}.values())
    bone_names = [bone.name for bone in result.bones]

    for frame in range(frame_count):
        time = min(frame / target_frame_rate * ticks_per_second, animation.duration)
        result.frame_poses.append(
            global_transforms(scene.root, animation, time, identity_matrix(), bone_names)
        )

    logger.info(
        "processed animation '%s' with %d bones and %d frames",
        result.name, result.bone_count, result.frame_count,
    )
    return result


def load_animations(scene: Scene, target_frame_rate: int) -> list[ModelAnimation]:
    """Bake every animation of ``scene``; those that cannot be processed are skipped."""
    if scene.root is None:
        raise ValueError("scene has no root node")
    if not scene.animations:
        logger.info("no animations found")
        return []

    loaded: list[ModelAnimation] = []
    for i, animation in enumerate(scene.animations):
        try:
            loaded.append(process_animation(scene, animation, target_frame_rate))
        except ValueError as error:
            logger.error("failed to process animation %d: %s", i, error)

    if not loaded:
        raise ValueError("no animations were successfully loaded")
    if len(loaded) < len(scene.animations):
        logger.warning(
            "only %d out of %d animations were successfully loaded",
            len(loaded), len(scene.animations),
        )
    return loaded


def find_animation(animations: Sequence[ModelAnimation], name: str) -> ModelAnimation | None:
    """The first animation called ``name``, if any."""
    return next((animation for animation in animations if animation.name == name), None)