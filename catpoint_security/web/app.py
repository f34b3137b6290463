"""Flask JSON API for the catpoint security system."""

from dataclasses import replace
from typing import Optional

from flask import Flask, jsonify, request

from ..config.defaults import CLASSIFIER_SETTINGS
from ..config_manager import ConfigManager
from ..exceptions import CollaboratorUnavailableError, ConfigurationError
from ..logging_config import get_logger
from ..models.security import ArmingStatus, Sensor, SensorType
from ..services.image_service import create_image_service, decode_image
from ..services.listeners import EventHistoryListener
from ..services.repository import create_repository
from ..services.security_service import SecurityService

logger = get_logger("web")


def _status_dict(status) -> dict:
    return {'name': status.name, 'description': status.description}


def _json_object() -> Optional[dict]:
    """Request body as a JSON object, or None when it is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _find_sensor(service: SecurityService, name: str, sensor_type: SensorType) -> Optional[Sensor]:
    for sensor in service.get_sensors():
        if sensor.name == name and sensor.sensor_type == sensor_type:
            return sensor
    return None


class CatpointWebApp:
    """Flask application exposing the security service over HTTP."""

    def __init__(self, service: SecurityService,
                 config_manager: Optional[ConfigManager] = None,
                 event_history_size: int = 100):
        self.app = Flask(__name__)
        self.service = service
        self.config_manager = config_manager

        self.app.config['MAX_CONTENT_LENGTH'] = CLASSIFIER_SETTINGS["max_upload_mb"] * 1024 * 1024

        self.events = EventHistoryListener(event_history_size)
        self.service.add_status_listener(self.events)

        self._setup_routes()

        logger.info("Catpoint web application initialized")

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.errorhandler(CollaboratorUnavailableError)
        def collaborator_unavailable(error):
            logger.error(f"Collaborator unavailable: {error}")
            return jsonify({'success': False, 'error': str(error)}), 503

        @self.app.route('/api/status')
        def api_status():
            """Get alarm status, arming status and sensors."""
            sensors = sorted(self.service.get_sensors(), key=lambda s: (s.name, s.sensor_type.name))
            return jsonify({
                'success': True,
                'data': {
                    'alarm_status': _status_dict(self.service.get_alarm_status()),
                    'arming_status': _status_dict(self.service.get_arming_status()),
                    'cat_detected': self.service.last_cat_detected,
                    'sensors': [s.to_dict() for s in sensors]
                }
            })

        @self.app.route('/api/arming', methods=['POST'])
        def api_set_arming():
            """Change the arming status."""
            data = _json_object() or {}
            try:
                arming_status = ArmingStatus[data['arming_status']]
            except (KeyError, TypeError):
                return jsonify({
                    'success': False,
                    'error': f"arming_status must be one of {[s.name for s in ArmingStatus]}"
                }), 400

            self.service.set_arming_status(arming_status)
            return jsonify({
                'success': True,
                'data': {'alarm_status': _status_dict(self.service.get_alarm_status())}
            })

        @self.app.route('/api/sensors', methods=['GET'])
        def api_list_sensors():
            sensors = sorted(self.service.get_sensors(), key=lambda s: (s.name, s.sensor_type.name))
            return jsonify({'success': True, 'data': [s.to_dict() for s in sensors]})

        @self.app.route('/api/sensors', methods=['POST'])
        def api_add_sensor():
            data = _json_object() or {}
            try:
                sensor = Sensor(name=str(data['name']), sensor_type=SensorType[data['sensor_type']])
            except (KeyError, TypeError):
                return jsonify({'success': False, 'error': 'name and a valid sensor_type are required'}), 400

            self.service.add_sensor(sensor)
            return jsonify({'success': True, 'data': sensor.to_dict()}), 201

        @self.app.route('/api/sensors', methods=['DELETE'])
        def api_remove_sensor():
            data = _json_object() or {}
            try:
                sensor = Sensor(name=str(data['name']), sensor_type=SensorType[data['sensor_type']])
            except (KeyError, TypeError):
                return jsonify({'success': False, 'error': 'name and a valid sensor_type are required'}), 400

            self.service.remove_sensor(sensor)
            return jsonify({'success': True, 'message': 'Sensor removed'})

        @self.app.route('/api/sensors/activation', methods=['POST'])
        def api_sensor_activation():
            """Activate or deactivate a registered sensor."""
            data = _json_object() or {}
            try:
                name = str(data['name'])
                sensor_type = SensorType[data['sensor_type']]
                active = data['active']
            except (KeyError, TypeError):
                return jsonify({
                    'success': False,
                    'error': 'name, sensor_type and active are required'
                }), 400
            if not isinstance(active, bool):
                return jsonify({'success': False, 'error': 'active must be a boolean'}), 400

            sensor = _find_sensor(self.service, name, sensor_type)
            if sensor is None:
                return jsonify({'success': False, 'error': f"Unknown sensor: {name}"}), 404

            self.service.change_sensor_activation_status(sensor, active)
            return jsonify({
                'success': True,
                'data': {
                    'sensor': sensor.to_dict(),
                    'alarm_status': _status_dict(self.service.get_alarm_status())
                }
            })

        @self.app.route('/api/image', methods=['POST'])
        def api_process_image():
            """Classify an uploaded camera frame."""
            upload = request.files.get('image')
            payload = upload.read() if upload else request.get_data()
            if not payload:
                return jsonify({'success': False, 'error': 'No image provided'}), 400

            try:
                image = decode_image(payload)
            except ValueError as e:
                return jsonify({'success': False, 'error': str(e)}), 400

            cat_detected = self.service.process_image(image)
            return jsonify({
                'success': True,
                'data': {
                    'cat_detected': cat_detected,
                    'alarm_status': _status_dict(self.service.get_alarm_status())
                }
            })

        @self.app.route('/api/events')
        def api_events():
            """Recent listener notifications, newest first."""
            limit = request.args.get('limit', 50, type=int)
            return jsonify({
                'success': True,
                'data': [event.to_dict() for event in self.events.get_events(limit)]
            })

        @self.app.route('/api/health')
        def api_health():
            """Collaborator health and recent errors."""
            hours = request.args.get('hours', 24, type=int)
            handler = self.service.error_handler
            health = handler.get_component_health()
            return jsonify({
                'success': True,
                'data': {
                    'components': {name: status.value for name, status in health.items()},
                    'errors': handler.get_error_summary(hours)
                }
            })

        @self.app.route('/api/config', methods=['GET'])
        def api_get_config():
            if self.config_manager is None:
                return jsonify({'success': False, 'error': 'Configuration is not managed'}), 404
            return jsonify({'success': True, 'data': self.config_manager.export_config()})

        @self.app.route('/api/config', methods=['POST'])
        def api_update_config():
            if self.config_manager is None:
                return jsonify({'success': False, 'error': 'Configuration is not managed'}), 404

            data = _json_object()
            if not data:
                return jsonify({'success': False, 'error': 'No data provided'}), 400

            try:
                self.config_manager.update_config(**data)
            except ConfigurationError as e:
                return jsonify({'success': False, 'error': str(e)}), 400

            return jsonify({'success': True, 'message': 'Configuration updated successfully'})

    def run(self, host: str = '0.0.0.0', port: int = 5000, debug: bool = False):
        """Run the Flask application."""
        logger.info(f"Starting Catpoint web application on {host}:{port}")
        self.app.run(host=host, port=port, debug=debug, threaded=True)


def build_service(config_manager: ConfigManager) -> SecurityService:
    """Wire a SecurityService from configuration."""
    config = config_manager.get_config()
    repository = create_repository(config.repository_backend, config.repository_path)
    image_service = create_image_service(config.classifier_backend)

    service = SecurityService(repository, image_service, replace(config))
    config_manager.register_change_callback(service.apply_config)
    return service


def create_app(config_manager: Optional[ConfigManager] = None) -> Flask:
    """Application factory."""
    config_manager = config_manager or ConfigManager()
    service = build_service(config_manager)
    web_app = CatpointWebApp(service, config_manager,
                             config_manager.get_config().event_history_size)
    return web_app.app
