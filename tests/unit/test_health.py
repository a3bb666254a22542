"""Unit tests for the health score."""

from dotenv_diff.core.health import compute_health_score
from dotenv_diff.models.env import DiffResult
from dotenv_diff.models.findings import SecretFinding, Severity, T3EnvWarning
from dotenv_diff.models.report import CompareReport, HealthWeights, ScanReport


def secret(severity):
    return SecretFinding(
        kind="pattern", file="a.ts", line=1, message="m", snippet="s", severity=severity
    )


class TestComputeHealthScore:
    """Tests for compute_health_score."""

    def test_clean_report(self):
        """Test an empty report scores 100."""
        assert compute_health_score(ScanReport()) == 100

    def test_single_missing(self):
        """Test one missing variable."""
        assert compute_health_score(ScanReport(missing=["A"])) == 80

    def test_secrets(self):
        """Test secret severities; low findings are free."""
        report = ScanReport(
            secrets=[secret(Severity.HIGH), secret(Severity.MEDIUM), secret(Severity.LOW)]
        )
        assert compute_health_score(report) == 70

    def test_compare_report(self):
        """Test that compare reports are scored through the same weights."""
        report = CompareReport(diff=DiffResult(missing=["A", "B"]))
        assert compute_health_score(report) == 60

    def test_clamped_at_zero(self):
        """Test the lower bound."""
        assert compute_health_score(ScanReport(missing=[f"K{i}" for i in range(10)])) == 0

    def test_small_defects(self):
        """Test unused variables."""
        assert compute_health_score(ScanReport(unused=["A", "B", "C"])) == 97

    def test_custom_weights(self):
        """Test configurable weights."""
        weights = HealthWeights(missing=5)
        assert compute_health_score(ScanReport(missing=["A"]), weights) == 95

    def test_t3env_warnings_are_free(self):
        """Test that t3-env warnings do not lower the score."""
        warning = T3EnvWarning(variable="A", reason="r", file="a.ts", line=1)
        assert compute_health_score(ScanReport(t3env_warnings=[warning])) == 100
