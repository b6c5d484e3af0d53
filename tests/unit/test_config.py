"""Tests for pool and API configuration."""

import pytest

from logit_amm.config import DEFAULT_POOL_CONFIG, ApiSettings, PoolConfig
from logit_amm.constants import MINIMUM_LIQUIDITY, NULL_ADDRESS, PROTOCOL_MIN_FEE, RATE_PRECISION


class TestPoolConfig:
    def test_defaults(self):
        assert DEFAULT_POOL_CONFIG.liquidity_fee == PROTOCOL_MIN_FEE
        assert DEFAULT_POOL_CONFIG.minimum_liquidity == MINIMUM_LIQUIDITY
        assert DEFAULT_POOL_CONFIG.rate_precision == RATE_PRECISION

    def test_zero_fee_rejected(self):
        """The fee divides the repayment margin, so it can't be zero."""
        with pytest.raises(ValueError):
            PoolConfig(liquidity_fee=0)

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValueError):
            PoolConfig(minimum_liquidity=-1)

    def test_zero_precision_rejected(self):
        with pytest.raises(ValueError):
            PoolConfig(rate_precision=0)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POOL_CONFIG.liquidity_fee = 1  # type: ignore[misc]


class TestApiSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LOGIT_AMM_HOST", "LOGIT_AMM_PORT", "LOGIT_AMM_DEBUG"):
            monkeypatch.delenv(name, raising=False)
        settings = ApiSettings.from_env()
        assert settings == ApiSettings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LOGIT_AMM_HOST", "127.0.0.1")
        monkeypatch.setenv("LOGIT_AMM_PORT", "9100")
        monkeypatch.setenv("LOGIT_AMM_DEBUG", "yes")
        settings = ApiSettings.from_env()
        assert settings.host == "127.0.0.1"
        assert settings.port == 9100
        assert settings.debug


def test_null_address_is_zero():
    assert int(NULL_ADDRESS, 16) == 0
    assert len(NULL_ADDRESS) == 42
