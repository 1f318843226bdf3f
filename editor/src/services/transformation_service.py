"""Transformation service - computes the Mobius transformation and transformed curves.

The rest of the application only depends on the TransformationService
interface: given three input/output pairs and a list of curve families,
return the transformed curves, or raise TransformationDoesNotExist.
LocalTransformationService does the work in-process with numpy.
"""
import logging
from abc import ABC, abstractmethod

from constants import CURVE_FAMILY_NAMES
from services import mobius_math
from services.curve_families import get_family_matrices

logger = logging.getLogger(__name__)


class TransformationDoesNotExist(Exception):
    """No Mobius transformation satisfies the given input/output pairs.

    Happens when the pairs contain duplicates (the relation is not one-to-one),
    or nearly so.
    """


class TransformationService(ABC):
    """Abstract interface to whatever computes transformations."""

    @abstractmethod
    def generate_mobius_transformation(self, inputs, outputs, curves):
        """Compute the transformation and apply it to the requested curve families.

        Args:
            inputs: Three ExtComplex source values, ordered val1, val2, val3
            outputs: Three ExtComplex image values, same order
            curves: Iterable of curve family keys to transform

        Returns:
            dict: CurveSet with exactly the requested family keys

        Raises:
            TransformationDoesNotExist: if the mapping is (nearly) singular
        """
        pass


class LocalTransformationService(TransformationService):
    """In-process solver."""

    def generate_mobius_transformation(self, inputs, outputs, curves):
        curves = list(curves)
        for key in curves:
            if key not in CURVE_FAMILY_NAMES:
                raise KeyError(f"unknown curve family: {key}")

        # Curves are constraints on the *input* of a function, so they transform
        # contravariantly: apply the inverse transformation to them.
        inv_tform = mobius_math.compute_mobius_tform(outputs, inputs)
        if inv_tform is None:
            logger.debug("No transformation for inputs=%s outputs=%s", inputs, outputs)
            raise TransformationDoesNotExist("transformation is singular or nearly singular")

        result = {}
        for key in curves:
            result[key] = tuple(
                mobius_math.matrix_to_curve(m @ inv_tform)
                for m in get_family_matrices(key)
            )
        return result
