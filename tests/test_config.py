from swagger_validate.config import Settings, load_settings


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.delenv("SWAGGER_VALIDATE_REJECT_STATUS", raising=False)
        settings = load_settings()
        assert settings.app_env == "development"
        assert settings.production is False
        assert settings.reject_status == 400

    def test_production(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "Production")
        assert load_settings().production is True

    def test_reject_status(self, monkeypatch):
        monkeypatch.setenv("SWAGGER_VALIDATE_REJECT_STATUS", "422")
        assert load_settings().reject_status == 422

    def test_reject_status_disabled(self, monkeypatch):
        monkeypatch.setenv("SWAGGER_VALIDATE_REJECT_STATUS", "none")
        assert load_settings().reject_status is None


class TestSettings:
    def test_non_production_envs(self):
        assert Settings(app_env="staging").production is False
        assert Settings(app_env="production").production is True
