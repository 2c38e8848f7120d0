import logging

import pytest

from modules.products.constants import PROC_FETCH_BY_CODE


class TestCorrelationIdInProductLogs:
    def test_gateway_failure_logged_with_correlation_id(
        self, product_api, gateway, caplog
    ):
        gateway.failing.add(PROC_FETCH_BY_CODE)
        custom_id = "product-failure-correlation-789"

        with caplog.at_level(logging.INFO):
            response = product_api.get("/produtos/123", HTTP_X_REQUEST_ID=custom_id)

        assert response.status_code == 400
        failures = [
            r.getMessage()
            for r in caplog.records
            if "product.operation_failed" in r.getMessage()
        ]
        assert failures, [r.getMessage() for r in caplog.records]
        assert custom_id in failures[0]
        assert "GatewayError" in failures[0]

    def test_raw_error_not_in_response(self, product_api, gateway):
        gateway.failing.add(PROC_FETCH_BY_CODE)

        response = product_api.get("/produtos/123")

        assert "SpSe1Produto" not in response.content.decode()


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_odbc_pwd_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {
            "event": "gateway.procedure_failed",
            "error": "Login failed: SERVER=db;UID=sa;PWD=Sup3rS3cret;",
        }
        result = mask_sensitive_data(None, None, event_dict)
        assert "Sup3rS3cret" not in result["error"]
        assert "***MASKED***" in result["error"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "product.created", "code": "123"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["code"] == "123"
        assert result["event"] == "product.created"
