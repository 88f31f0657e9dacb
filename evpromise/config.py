import pydantic_settings
from pydantic_settings import SettingsConfigDict

# in seperate module to avoid circular imports


def config_default(env_prefix, **kwargs):
    '''Model config shared by all settings classes, reads from the environment and a local .env file'''
    return SettingsConfigDict(
        env_prefix=env_prefix,
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        **kwargs
    )


class BaseSettings(pydantic_settings.BaseSettings):
    @classmethod
    def settings_customise_sources(cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings):
        return (
            env_settings,
            dotenv_settings,
            file_secret_settings,
            init_settings,  # constructor argument last, since they come from global yaml file
        )
