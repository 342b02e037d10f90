import unittest

from contract_validators.descriptors import type_name
from contract_validators.errors import SchemaError
from contract_validators.options import SchemaOptions
from tests import models

PERSON = type_name(models.Person)
TEAM = type_name(models.Team)


class SchemaOptionsTests(unittest.TestCase):
    def test_defaults(self):
        opts = SchemaOptions.EMPTY
        self.assertTrue(opts.enum_ignore_case)
        self.assertTrue(opts.allow_extra_fields)
        self.assertTrue(opts.is_required(PERSON, "name", nullable=False))
        self.assertFalse(opts.is_required(PERSON, "is_admin", nullable=True))
        self.assertIsNone(opts.get_min_count(TEAM, "members"))

    def test_builders_do_not_mutate(self):
        base = SchemaOptions.EMPTY
        changed = base.set_allow_extra_fields(False).set_enum_ignore_case(False)
        self.assertTrue(base.allow_extra_fields)
        self.assertFalse(changed.allow_extra_fields)
        self.assertFalse(changed.enum_ignore_case)

    def test_required_beats_optional_beats_nullability(self):
        opts = (SchemaOptions.EMPTY
                .set_optional(models.Person, "name")
                .set_required(models.Person, "name")
                .set_optional(models.Person, "age")
                .set_required(models.Person, "is_admin"))
        self.assertTrue(opts.is_required(PERSON, "name", nullable=False))
        self.assertFalse(opts.is_required(PERSON, "age", nullable=False))
        self.assertTrue(opts.is_required(PERSON, "is_admin", nullable=True))

    def test_counts(self):
        opts = SchemaOptions.EMPTY.set_min_count(models.Team, "members", 1).set_max_count(
            models.Team, "members", 5)
        self.assertEqual(opts.get_min_count(TEAM, "members"), 1)
        self.assertEqual(opts.get_max_count(TEAM, "members"), 5)
        self.assertIsNone(opts.get_min_count(TEAM, "properties"))

    def test_options_are_hashable_values(self):
        first = SchemaOptions.EMPTY.set_min_count(models.Team, "members", 1)
        second = SchemaOptions.EMPTY.set_min_count(models.Team, "members", 1)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))
        self.assertEqual(len({SchemaOptions.EMPTY, SchemaOptions(), first, second}), 2)
        self.assertNotEqual(first, first.set_max_count(models.Team, "members", 3))

    def test_counts_cannot_be_mutated_in_place(self):
        opts = SchemaOptions.EMPTY.set_max_count(models.Team, "members", 5)
        with self.assertRaises(TypeError):
            opts.max_counts[(TEAM, "members")] = 6
        self.assertEqual(SchemaOptions.EMPTY.min_counts, {})

    def test_unknown_field_fails_fast(self):
        with self.assertRaisesRegex(SchemaError, "not a field"):
            SchemaOptions.EMPTY.set_required(models.Person, "nickname")
        with self.assertRaises(SchemaError):
            SchemaOptions.EMPTY.set_min_count(models.Team, "captain", 1)

    def test_non_model_fails_fast(self):
        with self.assertRaises(SchemaError):
            SchemaOptions.EMPTY.set_optional(dict, "keys")

    def test_bad_counts(self):
        with self.assertRaises(SchemaError):
            SchemaOptions.EMPTY.set_min_count(models.Team, "members", -1)
        with self.assertRaises(SchemaError):
            SchemaOptions.EMPTY.set_max_count(models.Team, "members", True)
