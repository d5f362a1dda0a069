"""
AWS Lambda handler for the Savings Goal Calculator API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import json
import logging

from savings_engine import InputNormalizer, ProjectionEngine
from savings_engine.config import load_settings
from savings_engine.presets import DEFAULT_VALUES, EXAMPLES

settings = load_settings()

# Configure logging
logger = logging.getLogger()
logger.setLevel(getattr(logging, settings.log_level, logging.INFO))

# Environment (dev, staging, prod)
ENVIRONMENT = settings.environment

# Initialize engine (reused across warm invocations)
engine = ProjectionEngine(InputNormalizer(settings.field_specs()))

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


def _response(status_code, body):
    return {"statusCode": status_code, "headers": CORS_HEADERS, "body": json.dumps(body)}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - GET /examples
    - POST /calculate
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/calculate" and http_method == "POST":
        return handle_calculate(event)
    elif path == "/examples" and http_method == "GET":
        return handle_examples()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    else:
        return _response(404, {"error": "Not found", "path": path})


def handle_health():
    """Health check endpoint."""
    return _response(200, {"status": "healthy", "environment": ENVIRONMENT})


def handle_api_info():
    """API information endpoint."""
    return _response(
        200,
        {
            "status": "ok",
            "message": "Savings Goal Calculator API",
            "version": "1.0",
            "environment": ENVIRONMENT,
            "runtime": "AWS Lambda",
            "endpoints": {
                "calculate": "/calculate [POST]",
                "examples": "/examples [GET]",
                "health": "/health [GET]",
            },
        },
    )


def handle_examples():
    """Preset scenarios and form defaults."""
    return _response(
        200,
        {"defaults": DEFAULT_VALUES, "examples": [example.to_dict() for example in EXAMPLES]},
    )


def handle_calculate(event):
    """Normalize the form fields and project the savings plan."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return _response(400, {"error": "No input data provided", "status": "failed"})
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                import base64

                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        result = engine.process_from_dict(input_data)

        logger.info(f"Projection calculated: monthly payment {result['display']['monthly_payment']}")

        return _response(200, result)

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return _response(400, {"error": f"Invalid JSON: {str(e)}", "status": "failed"})

    except (ValueError, TypeError) as e:
        # Malformed payloads (unknown fields, invalid types, etc.)
        logger.error(f"Validation error: {str(e)}")
        return _response(400, {"error": f"Validation error: {str(e)}", "status": "validation_failed"})

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return _response(500, {"error": "An unexpected error occurred during processing", "status": "failed"})
