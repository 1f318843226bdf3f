"""
Shared fixtures for Mobius Visualizer tests.

Provides sample mappings, a recording transformation service, and store
fixtures.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widgets are created without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Sample mappings ──────────────────────────────────────────────────────

IDENTITY_MAPPINGS = {
    'val1': (0j, 0j),
    'val2': (5 + 0j, 5 + 0j),
    'val3': (5j, 5j),
}

# val2 and val3 both map to 5
SINGULAR_MAPPINGS = {
    'val1': (0j, 0j),
    'val2': (5 + 0j, 5 + 0j),
    'val3': (5j, 5 + 0j),
}


def make_mapping_set(mappings):
    from models.state import MappingSet, SamplePointMapping
    return MappingSet(**{key: SamplePointMapping(in_, out) for key, (in_, out) in mappings.items()})


class RecordingService:
    """TransformationService double that records every request.

    Wraps the real local solver unless ``fail`` is set, in which case every
    call reports that no transformation exists.
    """

    def __init__(self, fail=False):
        from services.transformation_service import LocalTransformationService
        self._inner = LocalTransformationService()
        self.fail = fail
        self.calls = []

    def generate_mobius_transformation(self, inputs, outputs, curves):
        from services.transformation_service import TransformationDoesNotExist
        self.calls.append((tuple(inputs), tuple(outputs), list(curves)))
        if self.fail:
            raise TransformationDoesNotExist("forced failure")
        return self._inner.generate_mobius_transformation(inputs, outputs, curves)


@pytest.fixture
def identity_points():
    """Mapping where every control point maps to itself"""
    return make_mapping_set(IDENTITY_MAPPINGS)


@pytest.fixture
def singular_points():
    """Mapping where two inputs share an output"""
    return make_mapping_set(SINGULAR_MAPPINGS)


@pytest.fixture
def service():
    """Recording service backed by the local solver"""
    return RecordingService()


@pytest.fixture
def failing_service():
    """Recording service that never finds a transformation"""
    return RecordingService(fail=True)


@pytest.fixture
def store(qapp, identity_points, service):
    """StateStore over the identity mapping with the cartesian family active"""
    from services.state_store import StateStore
    return StateStore.bootstrap(identity_points, ['cartesian'], service, check_cache=True)
