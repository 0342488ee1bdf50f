import tempfile
import unittest
from pathlib import Path

from typer.testing import CliRunner

from cli import commands
from cli.__main__ import app

SAMPLE_DIR = Path(__file__).resolve().parents[1] / "sample_data"
CUSTOMERS = SAMPLE_DIR / "customers.json"


class CommandsTest(unittest.TestCase):
    def test_bind_builtin_form(self):
        result = commands.bind("customers", CUSTOMERS)
        self.assertEqual(
            result.initial_values,
            {"field-company": "Aurora Industries", "field-quantity": 25},
        )
        self.assertEqual(len(result.select_options["field-customer"]), 4)

    def test_bind_single_field(self):
        result = commands.bind("customers", CUSTOMERS, field_id="field-quantity")
        self.assertEqual(result.initial_values, {"field-quantity": 25})
        self.assertEqual(result.select_options, {})

    def test_unknown_form_or_field(self):
        with self.assertRaises(ValueError):
            commands.bind("does-not-exist", CUSTOMERS)
        with self.assertRaises(ValueError):
            commands.bind("customers", CUSTOMERS, field_id="nope")

    def test_preview_origins(self):
        with tempfile.TemporaryDirectory() as tmp:
            form_path = Path(tmp) / "records.yaml"
            form_path.write_text(
                "form: records\n"
                "fields:\n"
                "  - {id: qty, type: number}\n"
                "  - {id: company, type: select, externalDataPath: '[1].options'}\n"
                "  - {id: unused}\n",
                encoding="utf-8",
            )
            report = commands.preview(str(form_path), SAMPLE_DIR / "field_records.json")
        origins = {p.field_id: p.origin for p in report.fields}
        self.assertEqual(origins, {"qty": "structure", "company": "path", "unused": "-"})
        self.assertEqual(report.bound_count, 2)
        lines = commands.print_preview(report)
        self.assertIn("Bound fields: 2/3", lines)
        self.assertIn("Unbound fields: unused", lines[-1])

    def test_resolve(self):
        self.assertEqual(commands.resolve(CUSTOMERS, "options[1]"), "Nordic Solutions")
        self.assertIsNone(commands.resolve(CUSTOMERS, "options[9]"))


class CliTest(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_bind(self):
        result = self.runner.invoke(app, ["bind", "--form", "customers", "--payload", str(CUSTOMERS)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"field-company": "Aurora Industries"', result.output)
        self.assertIn('"label": "Helio Labs"', result.output)

    def test_bind_missing_payload(self):
        result = self.runner.invoke(app, ["bind", "--form", "customers", "--payload", "missing.json"])
        self.assertEqual(result.exit_code, 2)

    def test_bind_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            payload = Path(tmp) / "broken.json"
            payload.write_text("{not json", encoding="utf-8")
            result = self.runner.invoke(app, ["bind", "--form", "customers", "--payload", str(payload)])
        self.assertEqual(result.exit_code, 2)

    def test_payload_that_is_not_utf8(self):
        with tempfile.TemporaryDirectory() as tmp:
            payload = Path(tmp) / "latin1.json"
            payload.write_bytes(b'{"name": "\xe9t\xe9"}')
            for args in (
                ["resolve", "name", "--payload", str(payload)],
                ["bind", "--form", "customers", "--payload", str(payload)],
                ["preview", "--form", "customers", "--payload", str(payload)],
            ):
                with self.subTest(command=args[0]):
                    result = self.runner.invoke(app, args)
                    self.assertEqual(result.exit_code, 2)

    def test_preview(self):
        result = self.runner.invoke(app, ["preview", "--form", "customers", "--payload", str(CUSTOMERS)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Bound fields: 3/3", result.output)

    def test_resolve(self):
        result = self.runner.invoke(app, ["resolve", "options[0]", "--payload", str(CUSTOMERS)])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('"Aurora Industries"', result.output)

    def test_resolve_nothing_found(self):
        result = self.runner.invoke(app, ["resolve", "missing.path", "--payload", str(CUSTOMERS)])
        self.assertEqual(result.exit_code, 1)


if __name__ == "__main__":
    unittest.main()
