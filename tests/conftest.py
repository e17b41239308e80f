"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def default_camera():
    """The default camera: 10 m out on the diagonal, looking at the origin."""
    from sensor_raytracer.camera.sensor import Camera, millimeters

    return Camera.looking_at(
        position=(10.0, 10.0, 10.0),
        target=(0.0, 0.0, 0.0),
        sensor=(millimeters(36.0), millimeters(24.0)),
        exposure=0.01,
        focal_length=millimeters(50.0),
    )


@pytest.fixture
def axis_camera():
    """A camera at the origin looking down -z, for hand-checkable geometry."""
    from sensor_raytracer.camera.sensor import Camera, millimeters

    return Camera(
        position=(0.0, 0.0, 0.0),
        look=(0.0, 0.0, -1.0),
        sensor=(millimeters(36.0), millimeters(24.0)),
        exposure=0.01,
        focal_length=millimeters(50.0),
    )
