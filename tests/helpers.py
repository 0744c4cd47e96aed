"""Constants shared by the test modules and conftest fixtures."""

BASE_URL = "https://api.amber.test/v1"
TOKEN = "psk_test_token"
SITE_ID = "01F5A5CRKMZ5BCX9P1S4V990AM"
