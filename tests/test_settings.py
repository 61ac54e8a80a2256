"""Settings validation for coverage run limits."""

import pytest
from pydantic import ValidationError

from gearbom.config.settings import Settings


class TestCoverageSettings:

    def test_defaults(self) -> None:
        settings = Settings(COVERAGE_MAX_CASES=1000, COVERAGE_BATCH_SIZE=100)
        assert settings.COVERAGE_MAX_CASES == 1000
        assert settings.COVERAGE_BATCH_SIZE == 100

    def test_max_cases_capped_at_guardrail(self) -> None:
        with pytest.raises(ValidationError):
            Settings(COVERAGE_MAX_CASES=5000)

    def test_max_cases_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(COVERAGE_MAX_CASES=0)

    def test_batch_size_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(COVERAGE_BATCH_SIZE=0)
