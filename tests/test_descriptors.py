import unittest
from typing import Any, Optional

from contract_validators.descriptors import (
    AnyType,
    ArrayType,
    EnumType,
    MapType,
    ModelType,
    NullableType,
    ScalarType,
    describe,
    model_descriptor,
    type_name,
)
from contract_validators.document import NodeKind
from contract_validators.errors import SchemaError
from tests import models


class DescribeTests(unittest.TestCase):
    def test_scalars(self):
        self.assertEqual(describe(int), ScalarType(NodeKind.NUMBER))
        self.assertEqual(describe(float), ScalarType(NodeKind.NUMBER))
        self.assertEqual(describe(bool), ScalarType(NodeKind.BOOLEAN))
        self.assertEqual(describe(str), ScalarType(NodeKind.STRING))
        self.assertEqual(describe(type(None)), ScalarType(NodeKind.NULL))

    def test_any(self):
        self.assertEqual(describe(Any), AnyType())
        self.assertEqual(describe(object), AnyType())

    def test_enum_members_by_name(self):
        self.assertEqual(describe(models.PersonKind),
                         EnumType(type_name(models.PersonKind), ("FIRST_KIND", "SECOND_KIND")))

    def test_nullable(self):
        self.assertEqual(describe(Optional[int]), NullableType(ScalarType(NodeKind.NUMBER)))
        self.assertEqual(describe(str | None), NullableType(ScalarType(NodeKind.STRING)))

    def test_collections(self):
        self.assertEqual(describe(list[int]), ArrayType(ScalarType(NodeKind.NUMBER)))
        self.assertEqual(describe(tuple[str, ...]), ArrayType(ScalarType(NodeKind.STRING)))
        self.assertEqual(describe(list), ArrayType(AnyType()))
        self.assertEqual(describe(dict[str, bool]), MapType(ScalarType(NodeKind.BOOLEAN)))
        self.assertEqual(describe(dict), MapType(AnyType()))

    def test_models(self):
        d = describe(models.Person)
        self.assertIsInstance(d, ModelType)
        self.assertEqual(d.name, "tests.models.Person")
        self.assertEqual([f.name for f in d.fields()],
                         ["name", "kind", "age", "is_admin", "date_of_birth"])
        self.assertTrue(d.fields()[3].is_nullable)
        self.assertFalse(d.fields()[0].is_nullable)

    def test_cyclic_model_fields_resolve(self):
        fields = model_descriptor(models.SelfCycle).fields()
        self.assertEqual(fields[0].type, NullableType(model_descriptor(models.SelfCycle)))

    def test_unsupported(self):
        for annotation in (int | str, dict[int, str], tuple[int, str], bytes, complex, "Forward"):
            with self.subTest(annotation=annotation):
                with self.assertRaises(SchemaError):
                    describe(annotation)

    def test_model_descriptor_requires_dataclass(self):
        with self.assertRaises(SchemaError):
            model_descriptor(int)
        with self.assertRaises(SchemaError):
            model_descriptor(models.Person(name="x", kind=models.PersonKind.FIRST_KIND, age=1))
