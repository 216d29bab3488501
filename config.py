import os

class Config:
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'hard-to-guess-key'
    LOG_LEVEL = 'INFO'

    # How the segment merge treats unusable rows: drop, report or strict
    MERGE_INVALID_ROW_POLICY = 'drop'

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'
    MERGE_INVALID_ROW_POLICY = 'report'

class TestingConfig(Config):
    TESTING = True

class ProductionConfig(Config):
    pass

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
