import unittest

from contract_validators import load_options
from contract_validators.descriptors import type_name
from contract_validators.errors import SchemaError
from tests import models
from tests._util import tmp_json, tmp_text

TEAM = type_name(models.Team)
PROPERTY = type_name(models.Property)


class LoaderTests(unittest.TestCase):
    def setUp(self):
        self.data = {
            "enum_ignore_case": False,
            "allow_extra_fields": False,
            "required": ["Team.budget"],
            "optional": ["Property.people"],
            "min_counts": {"Team.members": 1},
            "max_counts": {"tests.models.Team.members": 10},
        }

    def test_load_options_from_mapping(self):
        opts = load_options(self.data, models.Team, models.Property)
        self.assertFalse(opts.enum_ignore_case)
        self.assertFalse(opts.allow_extra_fields)
        self.assertIn((TEAM, "budget"), opts.required)
        self.assertIn((PROPERTY, "people"), opts.optional)
        self.assertEqual(opts.get_min_count(TEAM, "members"), 1)
        self.assertEqual(opts.get_max_count(TEAM, "members"), 10)

    def test_load_options_from_file(self):
        p = tmp_json(self.data)
        try:
            opts = load_options(p, models.Team, models.Property)
            self.assertEqual(opts, load_options(self.data, models.Team, models.Property))
            self.assertEqual(load_options(str(p), models.Team, models.Property).required,
                             opts.required)
        finally:
            p.unlink(missing_ok=True)

    def test_empty_config_gives_defaults(self):
        self.assertEqual(load_options({}), load_options({}, models.Team))

    def test_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            load_options("does_not_exist.json")

    def test_invalid_json_raises_value_error(self):
        p = tmp_text("{not json")
        try:
            with self.assertRaises(ValueError):
                load_options(p)
        finally:
            p.unlink(missing_ok=True)

    def test_non_object_config(self):
        p = tmp_json([1, 2])
        try:
            with self.assertRaises(SchemaError):
                load_options(p)
        finally:
            p.unlink(missing_ok=True)

    def test_unknown_key(self):
        with self.assertRaisesRegex(SchemaError, "Unknown option"):
            load_options({"strict": True})

    def test_unknown_model(self):
        with self.assertRaisesRegex(SchemaError, "unknown model"):
            load_options({"required": ["Person.name"]}, models.Team)

    def test_unknown_field(self):
        with self.assertRaises(SchemaError):
            load_options({"required": ["Team.captain"]}, models.Team)

    def test_flags_must_be_booleans(self):
        for key in ("enum_ignore_case", "allow_extra_fields"):
            for value in ("false", 0, None):
                with self.subTest(key=key, value=value):
                    with self.assertRaisesRegex(SchemaError, key):
                        load_options({key: value})

    def test_string_false_in_file_is_rejected(self):
        p = tmp_text('{"allow_extra_fields": "false"}')
        try:
            with self.assertRaises(SchemaError):
                load_options(p)
        finally:
            p.unlink(missing_ok=True)

    def test_selector_lists_must_be_lists(self):
        with self.assertRaisesRegex(SchemaError, "'required' must be a list"):
            load_options({"required": "Team.budget"}, models.Team)
        with self.assertRaisesRegex(SchemaError, "'optional' must be a list"):
            load_options({"optional": [1]}, models.Team)

    def test_counts_must_be_objects(self):
        with self.assertRaisesRegex(SchemaError, "'min_counts' must be an object"):
            load_options({"min_counts": ["Team.members"]}, models.Team)
        with self.assertRaisesRegex(SchemaError, "'max_counts' must be an object"):
            load_options({"max_counts": "Team.members"}, models.Team)
        with self.assertRaises(SchemaError):
            load_options({"min_counts": {"Team.members": "1"}}, models.Team)

    def test_malformed_selector(self):
        with self.assertRaises(SchemaError):
            load_options({"required": ["budget"]}, models.Team)
