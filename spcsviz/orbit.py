"""
Camera orbit interpolation.

The camera's orientation about the ellipsoid is expressed in spherical angles:
theta is the longitude (radians, east positive) and phi is the polar angle
measured from the north pole (radians, [0, π]). An orbit run eases both angles
from their current values to a target over a fixed duration, one sample per
animation tick.

Each request to orbit is stamped with a generation number. Starting a new orbit
supersedes any run still in flight: the stale run notices on its next tick and
stops without emitting anything further.
"""

__all__ = [
    'OrbitInterpolator', 'OrbitRun', 'OrbitSample', 'OrbitState', 'OrbitStatus',
    'camera_position', 'ease_out_cubic', 'latitude_to_phi', 'longitude_to_theta',
    'shortest_angle_delta',
]

from enum import Enum
import math
import time
from typing import Callable, Iterator, NamedTuple, Optional

from pydantic import PositiveFloat, validate_call

from spcsviz._const import DEFAULT_ORBIT_DURATION_MS
from spcsviz.coordinates import CartesianPoint
from spcsviz.utils.mixins import LoggingMixin


def _perf_counter_ms() -> float:
    return time.perf_counter() * 1000.


def shortest_angle_delta(current: float, target: float) -> float:
    """
    The signed change from current to target (radians), wrapped onto the short
    way around the circle, in [-π, π].
    """
    delta = target - current
    while delta > math.pi:
        delta -= 2 * math.pi
    while delta < -math.pi:
        delta += 2 * math.pi
    return delta


def ease_out_cubic(progress: float) -> float:
    """1 - (1 - p)^3; fast start, gentle arrival"""
    return 1 - (1 - progress) ** 3


def latitude_to_phi(latitude: float) -> float:
    """Latitude in degrees to the polar angle phi, in radians"""
    return math.radians(90. - latitude)


def longitude_to_theta(longitude: float) -> float:
    """Longitude in degrees (east positive) to theta, in radians"""
    return math.radians(longitude)


def camera_position(theta: float, phi: float, radius: float) -> CartesianPoint:
    """
    The camera location for an orientation, at the given distance from the origin.
    Consistent with point_on_sphere, i.e. +Y north, +Z toward the prime meridian.
    """
    return CartesianPoint(
        radius * math.sin(phi) * math.sin(theta),
        radius * math.cos(phi),
        radius * math.sin(phi) * math.cos(theta),
    )


class OrbitStatus(str, Enum):
    IDLE = 'idle'
    RUNNING = 'running'


class OrbitState(NamedTuple):
    """The endpoints of one orbit run, in radians"""
    current_theta: float
    current_phi: float
    target_theta: float
    target_phi: float
    generation: int


class OrbitSample(NamedTuple):
    theta: float
    phi: float
    elapsed_ms: float
    progress: float
    generation: int

    @property
    def is_final(self) -> bool:
        return self.progress >= 1.


class OrbitRun:
    """
    One in-flight orbit. Drive it either by calling tick() from the host's frame
    callback with the frame timestamp, or by iterating it, which reads its clock
    once per sample.

    Samples are strictly increasing in elapsed time, and the last one is exactly
    the target orientation.
    """

    def __init__(
        self,
        interpolator: 'OrbitInterpolator',
        state: OrbitState,
        duration_ms: float,
        clock: Callable[[], float],
    ):
        self._interpolator = interpolator
        self.state = state
        self.duration_ms = duration_ms
        self.clock = clock
        self.start_ms = clock()
        self._delta_theta = shortest_angle_delta(state.current_theta, state.target_theta)
        self._delta_phi = state.target_phi - state.current_phi
        self._last_elapsed: Optional[float] = None
        self.finished = False

    def __repr__(self):
        return (
            f'<OrbitRun(generation={self.state.generation}, '
            f'duration={self.duration_ms}ms, finished={self.finished})>'
        )

    def __iter__(self) -> Iterator[OrbitSample]:
        """
        Yields a sample per read of the run's clock until the run finishes or is
        superseded. Nothing paces the loop, so this is meant for test or offline
        clocks that advance on each read; animation hosts should call tick() once
        per frame instead.
        """
        while not self.finished:
            sample = self.tick(self.clock())
            if sample is not None:
                yield sample

    @property
    def generation(self) -> int:
        return self.state.generation

    @property
    def superseded(self) -> bool:
        return self._interpolator.generation != self.state.generation

    def sample_at(self, elapsed_ms: float) -> OrbitSample:
        """
        The eased orientation at a point in the run. Pure; doesn't advance the run.

        Args:
            elapsed_ms:
                Milliseconds since the run started

        Returns:
            OrbitSample
        """
        if elapsed_ms >= self.duration_ms:
            return OrbitSample(
                self.state.target_theta, self.state.target_phi,
                float(elapsed_ms), 1., self.state.generation
            )

        progress = max(elapsed_ms, 0.) / self.duration_ms
        eased = ease_out_cubic(progress)
        return OrbitSample(
            self.state.current_theta + self._delta_theta * eased,
            self.state.current_phi + self._delta_phi * eased,
            float(elapsed_ms),
            progress,
            self.state.generation,
        )

    def tick(self, now_ms: float) -> Optional[OrbitSample]:
        """
        Advances the run to a frame timestamp.

        Args:
            now_ms:
                The frame time, on the same clock the run was started with

        Returns:
            The sample for this frame, or None if the run has finished, has been
            superseded by a newer orbit, or the timestamp isn't after the last sample
        """
        if self.finished:
            return None

        if self.superseded:
            self._interpolator.logger.debug(
                'Orbit generation %s superseded by %s; stopping',
                self.state.generation, self._interpolator.generation
            )
            self.finished = True
            return None

        elapsed = now_ms - self.start_ms
        if self._last_elapsed is not None and elapsed <= self._last_elapsed:
            return None

        self._last_elapsed = elapsed
        sample = self.sample_at(elapsed)
        if sample.is_final:
            self.finished = True

        self._interpolator._observe(sample)  # pylint: disable=protected-access
        return sample


class OrbitInterpolator(LoggingMixin):
    """
    Smoothly reorients a camera toward a target latitude/longitude. Tracks the
    current orientation (updated by every emitted sample) and the generation of
    the newest run.
    """

    def __init__(
        self,
        theta: float = 0.,
        phi: float = math.pi / 2,
        clock: Optional[Callable[[], float]] = None,
    ):
        super().__init__()
        self.theta = theta
        self.phi = phi
        self.clock = clock or _perf_counter_ms
        self.generation = 0
        self._active: Optional[OrbitRun] = None

    def __repr__(self):
        return f'<OrbitInterpolator({self.status.value}, theta={self.theta}, phi={self.phi})>'

    @property
    def status(self) -> OrbitStatus:
        if self._active is not None and not self._active.finished:
            return OrbitStatus.RUNNING
        return OrbitStatus.IDLE

    @validate_call
    def start(
        self,
        current_theta: float,
        current_phi: float,
        target_theta: float,
        target_phi: float,
        duration_ms: PositiveFloat = DEFAULT_ORBIT_DURATION_MS,
        clock: Optional[Callable[[], float]] = None,
    ) -> OrbitRun:
        """
        Begins a new orbit, superseding any run in flight.

        Args:
            current_theta:
                Starting longitude angle, radians

            current_phi:
                Starting polar angle, radians

            target_theta:
                Target longitude angle, radians. Approached the short way around.

            target_phi:
                Target polar angle, radians

            duration_ms:
                (Default 1000) Length of the run in milliseconds; must be positive

            clock: (Optional)
                Overrides the interpolator's clock for this run

        Returns:
            OrbitRun
        """
        self.generation += 1
        state = OrbitState(current_theta, current_phi, target_theta, target_phi, self.generation)
        self.theta, self.phi = current_theta, current_phi
        self._active = OrbitRun(self, state, duration_ms, clock or self.clock)
        self.logger.debug(
            'Orbit generation %s: (%.4f, %.4f) -> (%.4f, %.4f) over %sms',
            self.generation, current_theta, current_phi, target_theta, target_phi, duration_ms
        )
        return self._active

    def orbit_to(
        self,
        latitude: float,
        longitude: float,
        duration_ms: float = DEFAULT_ORBIT_DURATION_MS,
    ) -> OrbitRun:
        """
        Begins an orbit from the current orientation toward a latitude/longitude
        (degrees).
        """
        return self.start(
            self.theta, self.phi,
            longitude_to_theta(longitude), latitude_to_phi(latitude),
            duration_ms
        )

    def _observe(self, sample: OrbitSample) -> None:
        if sample.generation == self.generation:
            self.theta, self.phi = sample.theta, sample.phi
