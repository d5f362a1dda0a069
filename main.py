from flask import Flask, request, jsonify
from flask_cors import CORS
from savings_engine import InputNormalizer, ProjectionEngine
from savings_engine.config import load_settings
from savings_engine.presets import DEFAULT_VALUES, EXAMPLES
import logging

settings = load_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the form front-end is hosted separately)
CORS(app)

# Initialize the projection engine
engine = ProjectionEngine(InputNormalizer(settings.field_specs()))


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Savings Goal Calculator API",
        "version": "1.0",
        "environment": settings.environment,
        "endpoints": {
            "calculate": "/calculate [POST]",
            "examples": "/examples [GET]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


@app.route("/examples", methods=["GET"])
def examples():
    """Preset scenarios and the form defaults"""
    return jsonify({
        "defaults": DEFAULT_VALUES,
        "examples": [example.to_dict() for example in EXAMPLES]
    }), 200


@app.route("/calculate", methods=["POST"])
def calculate():
    """
    Normalize the four form fields and project the savings plan
    """
    try:
        input_data = request.get_json(force=True, silent=True)

        if input_data is None:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        result = engine.process_from_dict(input_data)

        logger.info(f"Projection calculated: monthly payment {result['display']['monthly_payment']}")

        return jsonify(result), 200

    except ValueError as e:
        # Malformed payloads
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        # Unexpected errors
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port, debug=False)
