"""
Tests for the JSON wire format.
"""
import json

import pytest

from models.coord import INF
from models.curve import Circle, Line
from models.state import MappingSet
from services.wire_format import (
    TransformationRequest, TransformationResponse, WireFormatError,
    decode_curve, decode_curve_set, decode_ext_complex, decode_mapping_set,
    encode_curve, encode_ext_complex, encode_mapping_set
)


# ══════════════════════════════════════════════════════════════════════════
# ExtComplex
# ══════════════════════════════════════════════════════════════════════════

class TestExtComplex:

    def test_encode_finite(self):
        assert encode_ext_complex(1.5 - 2j) == [1.5, -2.0]

    def test_encode_infinity(self):
        assert encode_ext_complex(INF) == 'inf'

    def test_infinite_component_encodes_as_infinity(self):
        assert encode_ext_complex(complex(float('inf'), 3)) == 'inf'

    def test_nan_cannot_be_encoded(self):
        with pytest.raises(WireFormatError):
            encode_ext_complex(complex(0, float('nan')))

    def test_decode(self):
        assert decode_ext_complex([3, 4]) == 3 + 4j
        assert decode_ext_complex('inf') is INF

    def test_decode_huge_number_is_infinity(self):
        assert decode_ext_complex([1e400, 0]) is INF

    @pytest.mark.parametrize("data", ['infinity', [1], [1, 2, 3], None, {'re': 1}, ['a', 'b'], [float('nan'), 0]])
    def test_decode_rejects(self, data):
        with pytest.raises(WireFormatError):
            decode_ext_complex(data)


# ══════════════════════════════════════════════════════════════════════════
# Curves
# ══════════════════════════════════════════════════════════════════════════

class TestCurves:

    def test_encode_circle(self):
        assert encode_curve(Circle(center=1 + 2j, radius=3)) == {
            'type': 'circle', 'center': [1.0, 2.0], 'radius': 3,
        }

    def test_encode_line(self):
        assert encode_curve(Line(point=0j, slope=1j)) == {
            'type': 'line', 'point': [0.0, 0.0], 'slope': [0.0, 1.0],
        }

    def test_decode_line(self):
        assert decode_curve({'type': 'line', 'point': [1, 1], 'slope': [2, 0]}) == Line(point=1 + 1j, slope=2 + 0j)

    def test_degenerate_curve_rejected(self):
        with pytest.raises(WireFormatError):
            decode_curve({'type': 'circle', 'center': [0, 0], 'radius': 0})
        with pytest.raises(WireFormatError):
            decode_curve({'type': 'line', 'point': [0, 0], 'slope': [0, 0]})

    def test_unknown_type(self):
        with pytest.raises(WireFormatError):
            decode_curve({'type': 'parabola'})

    @pytest.mark.parametrize("data", [
        {'type': 'circle', 'center': [0, 0], 'radius': 'wide'},
        {'type': 'circle', 'center': [0, 0]},
        {'type': 'line', 'point': [0, 0]},
        "circle",
    ])
    def test_malformed_fields(self, data):
        with pytest.raises(WireFormatError):
            decode_curve(data)

    def test_infinite_curve_coordinates(self):
        with pytest.raises(WireFormatError):
            decode_curve({'type': 'circle', 'center': 'inf', 'radius': 1})

    def test_unknown_family(self):
        with pytest.raises(WireFormatError):
            decode_curve_set({'spiral': []})


# ══════════════════════════════════════════════════════════════════════════
# Mapping Set
# ══════════════════════════════════════════════════════════════════════════

class TestMappingSet:

    def test_encode_default(self):
        encoded = encode_mapping_set(MappingSet.default())
        assert encoded['val2'] == {'in': [5.0, 0.0], 'out': [5.0, 0.0]}
        assert list(encoded) == ['val1', 'val2', 'val3']

    def test_infinity_survives(self, identity_points):
        from models.state import SamplePointMapping
        points = identity_points.replace('val3', SamplePointMapping(INF, 1j))
        assert decode_mapping_set(encode_mapping_set(points)) == points

    def test_missing_point(self):
        with pytest.raises(WireFormatError):
            decode_mapping_set({'val1': {'in': [0, 0], 'out': [0, 0]}})

    def test_missing_side(self):
        data = encode_mapping_set(MappingSet.default())
        del data['val1']['out']
        with pytest.raises(WireFormatError):
            decode_mapping_set(data)


# ══════════════════════════════════════════════════════════════════════════
# Service Messages
# ══════════════════════════════════════════════════════════════════════════

class TestServiceMessages:

    def test_request_shape(self, identity_points):
        request = TransformationRequest(identity_points.inputs, identity_points.outputs, ['cartesian'])
        data = json.loads(request.to_json())
        assert data == {
            'inputs': [[0.0, 0.0], [5.0, 0.0], [0.0, 5.0]],
            'outputs': [[0.0, 0.0], [5.0, 0.0], [0.0, 5.0]],
            'curves': ['cartesian'],
        }

    def test_request_from_json(self):
        text = '{"inputs": ["inf", [0, 0], [1, 0]], "outputs": [[0, 0], "inf", [1, 0]], "curves": ["polar"]}'
        request = TransformationRequest.from_json(text)
        assert request.inputs == (INF, 0j, 1 + 0j)
        assert request.outputs == (0j, INF, 1 + 0j)
        assert request.curves == ['polar']

    def test_request_needs_three_points(self):
        with pytest.raises(WireFormatError):
            TransformationRequest.from_json('{"inputs": [[0, 0]], "outputs": [[0, 0]], "curves": []}')

    def test_malformed_request(self):
        with pytest.raises(WireFormatError):
            TransformationRequest.from_json('not json')

    def test_response_from_json(self):
        text = '{"curves": {"polar": [{"type": "circle", "center": [0, 0], "radius": 2}]}}'
        response = TransformationResponse.from_json(text)
        assert response.curves == {'polar': (Circle(center=0j, radius=2.0),)}

    def test_response_without_curves(self):
        with pytest.raises(WireFormatError):
            TransformationResponse.from_json('{"kind": "DoesNotExist"}')
