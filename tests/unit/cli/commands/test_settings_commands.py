"""Unit tests for the profile, categories and theme commands."""

from decimal import Decimal

from contractor_tracker.cli import cli
from contractor_tracker.cli.error_handlers import EXIT_VALIDATION


class TestProfileCommand:
    """Test suite for the profile command."""

    def test_show_empty_profile(self, runner, mock_env):
        """Test showing the profile without options."""
        result = runner.invoke(cli, ["profile"])

        assert result.exit_code == 0, result.output
        assert "Profile updated" not in result.output
        assert "Business" in result.output

    def test_update_profile(self, runner, mock_env, reload_data):
        """Test updating fields and default rates."""
        result = runner.invoke(
            cli,
            [
                "profile",
                "--name",
                "John Doe",
                "--business",
                "Doe Field Services LLC",
                "--rate",
                "standard=50",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Profile updated" in result.output
        assert "Standard Rate" in result.output
        assert "$50.00/hr" in result.output

        profile = reload_data().profile
        assert profile.name == "John Doe"
        assert profile.default_rates.standard_rate == Decimal("50")

    def test_rates_merge(self, runner, mock_env, reload_data):
        """Test later rate updates keep earlier ones."""
        runner.invoke(cli, ["profile", "--rate", "standard=50"])
        runner.invoke(cli, ["profile", "--rate", "overtime=75"])

        rates = reload_data().profile.default_rates
        assert rates.standard_rate == Decimal("50")
        assert rates.overtime_rate == Decimal("75")

    def test_negative_rate(self, runner, mock_env):
        """Test a negative rate is a validation error."""
        result = runner.invoke(cli, ["profile", "--rate", "standard=-5"])
        assert result.exit_code == EXIT_VALIDATION


class TestCategoriesCommand:
    """Test suite for the categories command."""

    def test_list(self, runner, mock_env):
        """Test the default categories are listed."""
        result = runner.invoke(cli, ["categories"])
        assert result.exit_code == 0
        assert "Fuel" in result.output
        assert "Parking/Tolls" in result.output

    def test_add(self, runner, mock_env, reload_data):
        """Test adding a new category."""
        result = runner.invoke(cli, ["categories", "--add", "Permits"])

        assert result.exit_code == 0, result.output
        assert "Added category 'Permits'" in result.output
        assert "Permits" in reload_data().categories

    def test_add_existing(self, runner, mock_env):
        """Test adding an existing category is reported."""
        result = runner.invoke(cli, ["categories", "--add", "fuel"])
        assert "Category 'fuel' already exists" in result.output


class TestThemeCommand:
    """Test suite for the theme command."""

    def test_show(self, runner, mock_env):
        """Test the default theme."""
        result = runner.invoke(cli, ["theme"])
        assert "Theme: dark" in result.output

    def test_set(self, runner, mock_env, reload_data):
        """Test setting the theme."""
        result = runner.invoke(cli, ["theme", "LIGHT"])

        assert result.exit_code == 0, result.output
        assert "Theme set to light" in result.output
        assert reload_data().theme.value == "light"

    def test_invalid(self, runner, mock_env):
        """Test unknown themes are usage errors."""
        result = runner.invoke(cli, ["theme", "sepia"])
        assert result.exit_code == 2
