"""
Alignment of projection surfaces to SPCS zones.

An aligner takes a ZoneParameterRecord and derives the rigid transform (an ordered
sequence of axis rotations plus an anisotropic scale) that carries a canonical
projection surface into the zone's position on the reference ellipsoid. The
rendering layer applies the transform to its own primitives; nothing here touches
a scene graph.

The canonical Transverse Mercator surface is an open cylinder with its axis along
local Y, radius equal to the ellipsoid's semi-major axis and height 2a, centered at
the origin. Rotations are applied in order about the surface's own axes (each step
right-multiplies the accumulated rotation), after which the scale acts in the
surface's canonical frame.
"""

__all__ = [
    'Axis', 'ProjectionAligner', 'ProjectionTransform', 'RotationStep', 'Scale',
    'TransverseMercatorAligner', 'UnsupportedProjectionError', 'align_projection',
    'cylinder_baselines', 'get_aligner', 'register_aligner',
]

import abc
from enum import Enum
import math
from typing import Dict, List, NamedTuple, Optional, Tuple, Type

import numpy as np

from spcsviz._const import CYLINDER_SEGMENTS
from spcsviz.angles import (
    LATITUDE_HEMISPHERES, LONGITUDE_HEMISPHERES, angle_to_degrees, format_angle
)
from spcsviz.ellipsoid import GRS80, Ellipsoid
from spcsviz.repository import ProjectionType, ZoneParameterRecord
from spcsviz.utils.functions import scale_factor_from_denominator
from spcsviz.utils.mixins import LoggingMixin


class UnsupportedProjectionError(NotImplementedError):
    """Raised when no aligner exists for a zone's projection type"""

    def __init__(self, projection_type):
        self.projection_type = projection_type
        label = getattr(projection_type, 'label', projection_type)
        super().__init__(f'Unsupported projection type: {label}')


class Axis(str, Enum):
    X = 'X'
    Y = 'Y'
    Z = 'Z'


class RotationStep(NamedTuple):
    """A rotation about one of the surface's axes; label names the parameter it realizes"""
    axis: Axis
    angle_radians: float
    label: str

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle_radians)

    def matrix(self) -> np.ndarray:
        """The 3x3 right-handed rotation matrix of this step"""
        c, s = math.cos(self.angle_radians), math.sin(self.angle_radians)
        if self.axis is Axis.X:
            return np.array([[1., 0., 0.], [0., c, -s], [0., s, c]])
        if self.axis is Axis.Y:
            return np.array([[c, 0., s], [0., 1., 0.], [-s, 0., c]])
        return np.array([[c, -s, 0.], [s, c, 0.], [0., 0., 1.]])


class Scale(NamedTuple):
    sx: float = 1.
    sy: float = 1.
    sz: float = 1.


class ProjectionTransform(NamedTuple):
    """
    The derived alignment of a projection surface to a zone.

    Besides the rotation steps and scale, the signed angles and scale factor that
    produced them are kept so that callers can report them. Any of these is None
    when the zone didn't supply the parameter (its step was skipped).
    """
    projection_type: ProjectionType
    rotations: Tuple[RotationStep, ...]
    scale: Scale = Scale()
    central_meridian_degrees: Optional[float] = None
    latitude_of_origin_degrees: Optional[float] = None
    scale_factor: Optional[float] = None
    scale_factor_denominator: Optional[int] = None
    surface_radius: float = GRS80.semi_major_axis
    surface_height: float = 2 * GRS80.semi_major_axis
    zone_name: Optional[str] = None

    def __repr__(self):
        steps = ', '.join(f'{r.axis.value}({r.angle_degrees:.4f}°)' for r in self.rotations)
        return f'<ProjectionTransform({self.projection_type.value}: {steps}; scale={tuple(self.scale)})>'

    @property
    def zone_rotations(self) -> Tuple[RotationStep, ...]:
        """The rotations contributed by zone parameters, i.e. excluding the base alignment"""
        return tuple(r for r in self.rotations if not r.label.startswith('base'))

    def rotation_matrix(self) -> np.ndarray:
        """The composed 3x3 rotation, steps right-multiplied in order"""
        out = np.identity(3)
        for step in self.rotations:
            out = out @ step.matrix()
        return out

    def matrix(self) -> np.ndarray:
        """The composed 3x3 linear transform, rotation after scale"""
        return self.rotation_matrix() @ np.diag(self.scale)

    def apply(self, points) -> np.ndarray:
        """
        Carries points from the surface's canonical frame into the ellipsoid frame.

        Args:
            points:
                An (n, 3) array-like of canonical-frame points, or a single point

        Returns:
            np.ndarray of the same shape
        """
        arr = np.asarray(points, dtype=float)
        return arr @ self.matrix().T

    def to_dict(self) -> Dict:
        return {
            'projection_type': self.projection_type.value,
            'rotations': [
                {'axis': r.axis.value, 'angle_radians': r.angle_radians, 'label': r.label}
                for r in self.rotations
            ],
            'scale': list(self.scale),
            'central_meridian_degrees': self.central_meridian_degrees,
            'latitude_of_origin_degrees': self.latitude_of_origin_degrees,
            'scale_factor': self.scale_factor,
            'scale_factor_denominator': self.scale_factor_denominator,
            'surface_radius': self.surface_radius,
            'surface_height': self.surface_height,
            'zone_name': self.zone_name,
        }


class ProjectionAligner(LoggingMixin, abc.ABC):
    """
    Base class for projection-surface aligners. Subclasses derive the zone-specific
    steps; every aligner shares the base alignment that maps the surface's default
    orientation onto the ellipsoid's axes (+Y polar, +Z prime meridian).
    """

    projection_type: ProjectionType

    def __init__(self, ellipsoid: Ellipsoid = GRS80):
        super().__init__()
        self.ellipsoid = ellipsoid

    @staticmethod
    def base_alignment() -> List[RotationStep]:
        return [
            RotationStep(Axis.X, math.pi / 2, 'base_x'),
            RotationStep(Axis.Z, math.pi / 2, 'base_z'),
        ]

    def __call__(self, record: ZoneParameterRecord) -> ProjectionTransform:
        return self.align(record)

    @abc.abstractmethod
    def align(self, record: ZoneParameterRecord) -> ProjectionTransform:
        """Derives the transform aligning this aligner's surface to the zone"""


class TransverseMercatorAligner(ProjectionAligner):
    """
    Aligns the Transverse Mercator cylinder:

        1. base alignment: +90° about X, then +90° about Z
        2. central meridian λ0 (E positive): -λ0 about Z
        3. latitude of origin φ0 (N positive): +φ0 about Y
        4. scale k = 1 - 1/D on the cross-section, (k, 1, k)

    With this convention the cylinder's angular basis (local +X) lands on the zone's
    origin (φ0, λ0). Missing or unreadable parameters skip their step.
    """

    projection_type = ProjectionType.TM

    def align(self, record: ZoneParameterRecord) -> ProjectionTransform:
        params = record.params
        rotations = self.base_alignment()

        raw_meridian = getattr(params, 'central_meridian', None)
        if raw_meridian is None:
            raw_meridian = getattr(params, 'longitude_of_origin', None)

        central_meridian = angle_to_degrees(raw_meridian, LONGITUDE_HEMISPHERES)
        if central_meridian is not None:
            rotations.append(
                RotationStep(Axis.Z, -math.radians(central_meridian), 'central_meridian')
            )
            self.logger.debug(
                'Rotated %s cylinder to central meridian %s (%s°)',
                record.name, format_angle(raw_meridian), central_meridian
            )
        elif raw_meridian is not None:
            self.warn_once('Unreadable central meridian %r for zone %s', raw_meridian, record.name)
        else:
            self.logger.debug('No central meridian for %s; skipping rotation', record.name)

        latitude = angle_to_degrees(params.latitude_of_origin, LATITUDE_HEMISPHERES)
        if latitude is not None:
            rotations.append(RotationStep(Axis.Y, math.radians(latitude), 'latitude_of_origin'))
            self.logger.debug(
                'Rotated %s cylinder to latitude of origin %s (%s°)',
                record.name, format_angle(params.latitude_of_origin), latitude
            )
        elif params.latitude_of_origin is not None:
            self.warn_once(
                'Unreadable latitude of origin %r for zone %s',
                params.latitude_of_origin, record.name
            )
        else:
            self.logger.debug('No latitude of origin for %s; skipping rotation', record.name)

        scale, scale_factor = Scale(), None
        denominator = getattr(params, 'scale_factor_denominator', None)
        if denominator is not None:
            scale_factor = scale_factor_from_denominator(denominator)
            scale = Scale(scale_factor, 1., scale_factor)
            self.logger.debug(
                'Applied scale factor %s (1 - 1/%s) to %s cylinder',
                scale_factor, denominator, record.name
            )

        return ProjectionTransform(
            self.projection_type,
            tuple(rotations),
            scale,
            central_meridian_degrees=central_meridian,
            latitude_of_origin_degrees=latitude,
            scale_factor=scale_factor,
            scale_factor_denominator=denominator,
            surface_radius=self.ellipsoid.semi_major_axis,
            surface_height=2 * self.ellipsoid.semi_major_axis,
            zone_name=record.name,
        )


_ALIGNER_MAP: Dict[ProjectionType, Type[ProjectionAligner]] = {
    ProjectionType.TM: TransverseMercatorAligner,
}


def register_aligner(
    projection_type: ProjectionType,
    aligner: Type[ProjectionAligner]
) -> None:
    """
    Registers the aligner used for a projection type, replacing any existing one.

    Args:
        projection_type:
            The projection kind the aligner handles

        aligner:
            A ProjectionAligner subclass
    """
    if not (isinstance(aligner, type) and issubclass(aligner, ProjectionAligner)):
        raise TypeError(f'Aligners must subclass ProjectionAligner, not {aligner!r}')

    _ALIGNER_MAP[ProjectionType(projection_type)] = aligner


def get_aligner(projection_type: ProjectionType, ellipsoid: Ellipsoid = GRS80) -> ProjectionAligner:
    """
    Instantiates the aligner registered for a projection type.

    Raises:
        UnsupportedProjectionError: if no aligner is registered for the type
    """
    try:
        projection_type = ProjectionType(projection_type)
    except ValueError as exc:
        raise UnsupportedProjectionError(projection_type) from exc

    if projection_type not in _ALIGNER_MAP:
        raise UnsupportedProjectionError(projection_type)

    return _ALIGNER_MAP[projection_type](ellipsoid)


def align_projection(
    record: ZoneParameterRecord,
    ellipsoid: Ellipsoid = GRS80
) -> ProjectionTransform:
    """
    Derives the projection-surface transform for a zone, dispatching on its
    projection type.

    Args:
        record:
            The zone's parameter record

        ellipsoid: (Ellipsoid)
            (Default GRS80) The reference ellipsoid sizing the surface

    Returns:
        ProjectionTransform

    Raises:
        UnsupportedProjectionError: for projection types without an aligner
            (currently Lambert Conformal Conic and Oblique Mercator)
    """
    return get_aligner(record.projection_type, ellipsoid).align(record)


def cylinder_baselines(
    radius: float,
    height: float,
    segments: int = CYLINDER_SEGMENTS
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reference lines of the canonical cylinder: the angular basis (a line along the
    cylinder at local +X, i.e. 0°) and the ring around its middle at y = 0.

    Returns:
        Tuple of (basis line as a (2, 3) array, center ring as a (segments + 1, 3) array)
    """
    basis = np.array([[radius, -height / 2, 0.], [radius, height / 2, 0.]])

    theta = np.linspace(0., 2 * np.pi, segments + 1)
    ring = np.column_stack([radius * np.cos(theta), np.zeros_like(theta), radius * np.sin(theta)])
    ring[-1] = ring[0]

    return basis, ring
