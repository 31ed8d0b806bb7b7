"""
地理信息查询 API
"""
from unittest.mock import patch


@patch("app.api.geo.address_service")
def test_zipcode_lookup(mock_address_service, client):
    mock_address_service.lookup_by_zipcode.return_value = "島根県松江市殿町"
    response = client.get("/api/v1/geo/zipcode/690-0887")
    assert response.json() == {"zipcode": "690-0887", "address": "島根県松江市殿町"}


@patch("app.api.geo.address_service")
def test_zipcode_lookup_failure_returns_null(mock_address_service, client):
    mock_address_service.lookup_by_zipcode.return_value = None
    response = client.get("/api/v1/geo/zipcode/0000000")
    assert response.status_code == 200
    assert response.json()["address"] is None


@patch("app.api.geo.geocoding_service")
def test_geocode_normalizes_address(mock_geocoding_service, client):
    mock_geocoding_service.geocode.return_value = {"lat": 35.475, "lng": 133.0506, "accuracy": "ROOFTOP"}
    response = client.get("/api/v1/geo/geocode", params={"address": "松江市殿町１－５"})

    assert response.json()["address"] == "松江市殿町1-5"
    mock_geocoding_service.geocode.assert_called_once_with("松江市殿町1-5")


def test_geocode_without_api_key_returns_null(client):
    response = client.get("/api/v1/geo/geocode", params={"address": "松江城"})
    assert response.status_code == 200
    assert response.json()["result"] is None


@patch("app.api.geo.geocoding_service")
def test_reverse_geocode(mock_geocoding_service, client):
    mock_geocoding_service.reverse_geocode.return_value = "島根県松江市殿町"
    response = client.get("/api/v1/geo/reverse", params={"lat": 35.475, "lng": 133.0506})
    assert response.json()["address"] == "島根県松江市殿町"
