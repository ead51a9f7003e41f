import pytest
from pydantic import ValidationError

from src.platform.config.core_setting import Settings


@pytest.mark.unit
class TestSettings:
    def test_environment_overrides_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('SERVER_PORT', '5151')
        monkeypatch.setenv('MAX_SEATS_PER_BOOKING', '4')

        settings = Settings()  # type: ignore

        assert settings.SERVER_PORT == 5151
        assert settings.MAX_SEATS_PER_BOOKING == 4

    def test_admin_password_is_secret(self) -> None:
        settings = Settings(DEFAULT_ADMIN_PASSWORD='topsecret')  # type: ignore
        assert 'topsecret' not in repr(settings)
        assert settings.DEFAULT_ADMIN_PASSWORD.get_secret_value() == 'topsecret'

    @pytest.mark.parametrize('rounds', [3, 32])
    def test_bcrypt_rounds_out_of_range(self, rounds: int) -> None:
        with pytest.raises(ValidationError, match='BCRYPT_ROUNDS'):
            Settings(BCRYPT_ROUNDS=rounds)  # type: ignore

    def test_max_seats_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match='MAX_SEATS_PER_BOOKING'):
            Settings(MAX_SEATS_PER_BOOKING=0)  # type: ignore
