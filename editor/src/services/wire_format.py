"""JSON wire format for values exchanged with the transformation service and saved to disk.

Encodings:
- ExtComplex: the string "inf", or [real, imag]. Values with an infinite
  component encode as "inf"; NaN cannot be encoded.
- Curve: {"type": "circle", "center": [x, y], "radius": r}
         {"type": "line", "point": [x, y], "slope": [x, y]}
- CurveSet: {family_key: [curve, ...]}
- MappingSet: {"val1": {"in": ..., "out": ...}, ...}
"""
import json
import math
from dataclasses import dataclass, field
from typing import List, Tuple

from constants import CONTROL_POINT_KEYS
from models.coord import INF
from models.curve import Circle, InvalidCurveError, Line, is_curve_family
from models.state import MappingSet, SamplePointMapping


class WireFormatError(ValueError):
    """Raised when a value can not be encoded or decoded."""


# ======================================================================
# ExtComplex
# ======================================================================

def encode_ext_complex(value):
    if value is INF:
        return 'inf'
    value = complex(value)
    if math.isnan(value.real) or math.isnan(value.imag):
        raise WireFormatError("value contains nan")
    if math.isinf(value.real) or math.isinf(value.imag):
        return 'inf'
    return [value.real, value.imag]


def decode_ext_complex(data):
    if isinstance(data, str):
        if data == 'inf':
            return INF
        raise WireFormatError(f"expected the string \"inf\" or a pair of numbers, got {data!r}")
    if not isinstance(data, (list, tuple)) or len(data) != 2:
        raise WireFormatError(f"expected the string \"inf\" or a pair of numbers, got {data!r}")
    try:
        real, imag = float(data[0]), float(data[1])
    except (TypeError, ValueError) as e:
        raise WireFormatError(f"invalid complex components: {data!r}") from e
    except OverflowError:
        return INF
    if math.isnan(real) or math.isnan(imag):
        raise WireFormatError("value contains nan")
    if math.isinf(real) or math.isinf(imag):
        # numbers too large for a float are treated as the point at infinity
        return INF
    return complex(real, imag)


def _encode_complex(value):
    return [value.real, value.imag]


def _decode_complex(data):
    value = decode_ext_complex(data)
    if value is INF:
        raise WireFormatError("curve coordinates must be finite")
    return value


# ======================================================================
# Curves
# ======================================================================

def encode_curve(curve):
    if isinstance(curve, Circle):
        return {'type': 'circle', 'center': _encode_complex(curve.center), 'radius': curve.radius}
    if isinstance(curve, Line):
        return {'type': 'line', 'point': _encode_complex(curve.point), 'slope': _encode_complex(curve.slope)}
    raise TypeError(f"not a curve: {curve!r}")


def decode_curve(data):
    try:
        kind = data['type']
        if kind == 'circle':
            return Circle(center=_decode_complex(data['center']), radius=float(data['radius']))
        if kind == 'line':
            return Line(point=_decode_complex(data['point']), slope=_decode_complex(data['slope']))
    except WireFormatError:
        raise
    except InvalidCurveError as e:
        raise WireFormatError(str(e)) from e
    except (KeyError, TypeError, ValueError) as e:
        raise WireFormatError(f"malformed curve: {data!r}") from e
    raise WireFormatError(f"unknown curve type: {kind!r}")


def encode_curve_set(curves):
    return {key: [encode_curve(c) for c in family] for key, family in curves.items()}


def decode_curve_set(data):
    if not isinstance(data, dict):
        raise WireFormatError("curve set must be an object")
    result = {}
    for key, family in data.items():
        if not is_curve_family(key):
            raise WireFormatError(f"unknown curve family: {key!r}")
        result[key] = tuple(decode_curve(c) for c in family)
    return result


# ======================================================================
# Mapping set
# ======================================================================

def encode_mapping_set(points):
    return {
        key: {'in': encode_ext_complex(mapping.in_), 'out': encode_ext_complex(mapping.out)}
        for key, mapping in points.items()
    }


def decode_mapping_set(data):
    if not isinstance(data, dict):
        raise WireFormatError("mapping set must be an object")
    if set(data) != set(CONTROL_POINT_KEYS):
        raise WireFormatError(f"mapping set must contain exactly {', '.join(CONTROL_POINT_KEYS)}")
    try:
        return MappingSet(**{
            key: SamplePointMapping(
                in_=decode_ext_complex(data[key]['in']),
                out=decode_ext_complex(data[key]['out']),
            )
            for key in CONTROL_POINT_KEYS
        })
    except (KeyError, TypeError) as e:
        raise WireFormatError(f"malformed mapping set: {data!r}") from e


# ======================================================================
# Service request / response
# ======================================================================

@dataclass(frozen=True)
class TransformationRequest:
    """Request body for the transformation service."""
    inputs: Tuple
    outputs: Tuple
    curves: List[str] = field(default_factory=list)

    def to_json(self):
        return json.dumps({
            'inputs': [encode_ext_complex(v) for v in self.inputs],
            'outputs': [encode_ext_complex(v) for v in self.outputs],
            'curves': list(self.curves),
        })

    @classmethod
    def from_json(cls, text):
        try:
            data = json.loads(text)
            inputs = tuple(decode_ext_complex(v) for v in data['inputs'])
            outputs = tuple(decode_ext_complex(v) for v in data['outputs'])
            curves = list(data.get('curves', []))
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise WireFormatError(f"malformed request: {e}") from e
        if len(inputs) != 3 or len(outputs) != 3:
            raise WireFormatError("request needs exactly three inputs and three outputs")
        return cls(inputs=inputs, outputs=outputs, curves=curves)


@dataclass(frozen=True)
class TransformationResponse:
    """Successful response body from the transformation service."""
    curves: dict

    def to_json(self):
        return json.dumps({'curves': encode_curve_set(self.curves)})

    @classmethod
    def from_json(cls, text):
        try:
            data = json.loads(text)
            curves = data['curves']
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            raise WireFormatError(f"malformed response: {e}") from e
        return cls(curves=decode_curve_set(curves))
