import unittest

from fastapi.testclient import TestClient

from api.main import app


class BindingApiTest(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_bind_structural_records(self):
        response = self.client.post(
            "/api/bind",
            json={
                "payload": [{"fieldId": "qty", "value": 5}, {"fieldId": "company", "value": "Acme"}],
                "fields": [
                    {"id": "qty", "label": "Quantity", "type": "number"},
                    {"id": "company", "label": "Company", "type": "text"},
                ],
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"selectOptions": {}, "initialValues": {"qty": 5, "company": "Acme"}})

    def test_bind_with_paths(self):
        response = self.client.post(
            "/api/bind",
            json={
                "payload": {"countries": [{"name": "Sweden", "code": "se"}, {"name": "Norway", "code": "no"}]},
                "fields": [
                    {
                        "id": "country",
                        "label": "Country",
                        "type": "select",
                        "externalDataPath": "countries[].name",
                        "externalDataValuePath": "countries[].code",
                    }
                ],
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json()["selectOptions"]["country"],
            [{"value": "se", "label": "Sweden"}, {"value": "no", "label": "Norway"}],
        )

    def test_bind_scalar_payload_resolves_nothing(self):
        response = self.client.post(
            "/api/bind",
            json={"payload": "plain text", "fields": [{"id": "x", "externalDataPath": "a.b"}]},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"selectOptions": {}, "initialValues": {}})

    def test_bind_rejects_field_without_id(self):
        response = self.client.post("/api/bind", json={"payload": {}, "fields": [{"label": "No id"}]})
        self.assertEqual(response.status_code, 422)

    def test_resolve(self):
        payload = {"data": {"items": [{"value": 1}, {"value": 2}, {"x": 3}]}}
        response = self.client.post("/api/resolve", json={"payload": payload, "path": "data.items[].value"})
        self.assertEqual(response.json(), {"path": "data.items[].value", "found": True, "value": [1, 2]})

        response = self.client.post("/api/resolve", json={"payload": payload, "path": "data.items[9]"})
        self.assertEqual(response.json()["found"], False)

    def test_forms(self):
        response = self.client.get("/api/forms")
        self.assertEqual(response.status_code, 200)
        self.assertIn("customers", [form["name"] for form in response.json()])

        response = self.client.get("/api/forms/customers")
        self.assertEqual(response.status_code, 200)
        fields = response.json()["fields"]
        self.assertEqual(fields[0]["externalDataPath"], "field-company")

        response = self.client.get("/api/forms/unknown")
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
