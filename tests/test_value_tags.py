from __future__ import annotations

import importlib.util
import unittest
from decimal import Decimal
from fractions import Fraction


JAX_AVAILABLE = importlib.util.find_spec("jax") is not None


@unittest.skipUnless(JAX_AVAILABLE, "jax is required for value-tag tests")
class ValueTagTests(unittest.TestCase):
    def test_scalar_representations_resolve_to_one_tag_each(self) -> None:
        from polynum import TypeTag, Unit, resolve_tag

        cases = [
            (3, TypeTag.NUMBER),
            (2.5, TypeTag.NUMBER),
            (float("nan"), TypeTag.NUMBER),
            (2 + 1j, TypeTag.COMPLEX),
            (Decimal("1.25"), TypeTag.BIGNUMBER),
            (Fraction(1, 3), TypeTag.FRACTION),
            (Unit(5, "cm"), TypeTag.UNIT),
            (True, TypeTag.BOOLEAN),
            (False, TypeTag.BOOLEAN),
            ("3.5", TypeTag.STRING),
            (None, TypeTag.NULL),
        ]
        for value, tag in cases:
            with self.subTest(value=value):
                self.assertIs(resolve_tag(value), tag)

    def test_bool_is_not_a_number(self) -> None:
        from polynum import TypeTag, resolve_tag

        self.assertIsNot(resolve_tag(True), TypeTag.NUMBER)
        self.assertIs(resolve_tag(1), TypeTag.NUMBER)

    def test_collections_are_array_or_matrix(self) -> None:
        import jax.numpy as jnp

        from polynum import MATRIX_LIKE, TypeTag, is_matrix_like, resolve_tag

        self.assertIs(resolve_tag([1, 2]), TypeTag.ARRAY)
        self.assertIs(resolve_tag([]), TypeTag.ARRAY)
        self.assertIs(resolve_tag((1, 2)), TypeTag.ARRAY)
        self.assertIs(resolve_tag(jnp.arange(4)), TypeTag.MATRIX)
        self.assertIs(resolve_tag(jnp.zeros((2, 3))), TypeTag.MATRIX)
        self.assertEqual(MATRIX_LIKE, frozenset({TypeTag.ARRAY, TypeTag.MATRIX}))
        self.assertTrue(is_matrix_like([1]))
        self.assertTrue(is_matrix_like(jnp.ones(2)))
        self.assertFalse(is_matrix_like(1.0))

    def test_zero_dimensional_jax_arrays_are_scalars(self) -> None:
        import jax.numpy as jnp

        from polynum import TypeTag, resolve_tag

        self.assertIs(resolve_tag(jnp.asarray(2.0)), TypeTag.NUMBER)
        self.assertIs(resolve_tag(jnp.asarray(7, dtype=jnp.int32)), TypeTag.NUMBER)
        self.assertIs(resolve_tag(jnp.asarray(1 + 2j)), TypeTag.COMPLEX)
        self.assertIs(resolve_tag(jnp.asarray(True)), TypeTag.BOOLEAN)

    def test_host_scalars_are_tagged_by_dtype(self) -> None:
        import jax
        import jax.numpy as jnp

        from polynum import TypeTag, resolve_tag

        cases = (
            (jnp.bfloat16, TypeTag.NUMBER),
            (jnp.float16, TypeTag.NUMBER),
            (jnp.int8, TypeTag.NUMBER),
            (jnp.complex64, TypeTag.COMPLEX),
            (jnp.bool_, TypeTag.BOOLEAN),
        )
        for dtype, expected in cases:
            with self.subTest(dtype=jnp.dtype(dtype).name):
                element = jax.device_get(jnp.ones(2, dtype=dtype))[0]
                self.assertIs(resolve_tag(element), expected)

    def test_functions_and_plain_objects_have_tags(self) -> None:
        from polynum import TypeTag, resolve_tag

        class Custom:
            pass

        self.assertIs(resolve_tag(len), TypeTag.FUNCTION)
        self.assertIs(resolve_tag(lambda x: x), TypeTag.FUNCTION)
        self.assertIs(resolve_tag({"a": 1}), TypeTag.OBJECT)
        self.assertIs(resolve_tag(Custom()), TypeTag.OBJECT)

    def test_values_without_a_category_are_rejected(self) -> None:
        from polynum import UnsupportedTypeError, resolve_tag

        for value in (object(), b"bytes", {1, 2}, frozenset()):
            with self.subTest(value=value):
                with self.assertRaises(UnsupportedTypeError) as ctx:
                    resolve_tag(value)
                self.assertEqual(ctx.exception.type_name, type(value).__name__)
                self.assertIsInstance(ctx.exception, TypeError)
                self.assertIsNone(ctx.exception.operation)

    def test_tags_print_as_signature_names(self) -> None:
        from polynum import TypeTag

        self.assertEqual(str(TypeTag.BIGNUMBER), "BigNumber")
        self.assertEqual(TypeTag("Matrix"), TypeTag.MATRIX)

    def test_value_info_reports_shape_size_and_depth(self) -> None:
        import jax.numpy as jnp

        from polynum import TypeTag, value_info

        nested = value_info([[1, 2, 3], [4, 5, 6]])
        self.assertEqual(nested.tag, TypeTag.ARRAY)
        self.assertEqual(nested.shape, (2, 3))
        self.assertEqual(nested.size, 6)
        self.assertEqual(nested.depth, 2)

        ragged = value_info([1, [2, 3]])
        self.assertEqual(ragged.shape, (2,))
        self.assertEqual(ragged.size, 3)
        self.assertEqual(ragged.depth, 2)

        matrix = value_info(jnp.zeros((3, 4)))
        self.assertEqual(matrix.tag, TypeTag.MATRIX)
        self.assertEqual(matrix.shape, (3, 4))
        self.assertEqual(matrix.size, 12)

        scalar = value_info(Fraction(1, 2))
        self.assertEqual(scalar.shape, ())
        self.assertEqual(scalar.depth, 0)

    def test_is_zero_only_for_numeric_representations(self) -> None:
        from polynum import Unit
        from polynum.values import is_zero

        self.assertTrue(is_zero(0))
        self.assertTrue(is_zero(-0.0))
        self.assertTrue(is_zero(0j))
        self.assertTrue(is_zero(Decimal(0)))
        self.assertTrue(is_zero(Fraction(0)))
        self.assertFalse(is_zero(False))
        self.assertFalse(is_zero("0"))
        self.assertFalse(is_zero(Unit(0, "m")))
        self.assertFalse(is_zero(float("nan")))
        self.assertFalse(is_zero(Decimal("sNaN")))
        self.assertFalse(is_zero(Decimal("NaN")))
        self.assertFalse(is_zero(object()))


if __name__ == "__main__":
    unittest.main()
