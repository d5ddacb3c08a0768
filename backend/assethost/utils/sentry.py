import sentry_sdk

from assethost.config import Config

def initialize_sentry(config: Config):
    if config.SENTRY_DSN:
        sentry_sdk.init(dsn=config.SENTRY_DSN, traces_sample_rate=1.0)
