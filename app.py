import logging
import os
from flask import Flask
from config import config
from src.routes.wellbore import wellbore_bp
from src.routes.survey_data import survey_data_bp
from src.routes.hydraulics import hydraulics_bp
from src.routes.nodal_analysis import nodal_analysis_bp


def create_app(config_name=None):
    app = Flask(__name__)

    config_name = config_name or os.environ.get('APP_CONFIG', 'default')
    app.config.from_object(config.get(config_name, config['default']))

    # Environment variables override the selected config class
    if 'DEBUG' in os.environ:
        app.config['DEBUG'] = os.environ['DEBUG'].lower() == 'true'
    if 'TESTING' in os.environ:
        app.config['TESTING'] = os.environ['TESTING'].lower() == 'true'
    for key in ('SECRET_KEY', 'LOG_LEVEL', 'MERGE_INVALID_ROW_POLICY'):
        if os.environ.get(key):
            app.config[key] = os.environ[key]

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Wellbore design: merged segments, row recalculation, validation
    app.register_blueprint(wellbore_bp, url_prefix='/api/v1/wellbore')

    # Deviation survey upload
    app.register_blueprint(survey_data_bp, url_prefix='/api/v1/survey')

    # Hydraulics request assembly
    app.register_blueprint(hydraulics_bp, url_prefix='/api/v1/hydraulics')

    # IPR/VLP operating point and bubble point selection
    app.register_blueprint(nodal_analysis_bp, url_prefix='/api/v1/nodal-analysis')

    @app.route('/healthz', methods=['GET'])
    def health_check():
        return {'status': 'healthy'}, 200

    return app

if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
