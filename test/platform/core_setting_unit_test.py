from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def _no_cors_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)


@pytest.mark.unit
class TestCorsOrigins:
    def test_shipped_env_example_loads(self) -> None:
        settings = Settings(_env_file=PROJECT_ROOT / '.env.example')  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000']

    def test_comma_separated_origins_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text('BACKEND_CORS_ORIGINS=http://localhost:3000, https://cinema.example\n')

        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['http://localhost:3000', 'https://cinema.example']

    def test_json_list_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', '["https://cinema.example"]')

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == ['https://cinema.example']

    def test_unset_means_no_origins(self) -> None:
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.BACKEND_CORS_ORIGINS == []
