"""Importer API server.

Exposes each importer operation as a JSON endpoint. Responses carry the
operation result as `{"ok": ...}` or `{"error": "..."}`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Type, TypeVar

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .. import services
from ..config import Settings, get_settings
from .errors import ValidationError, handle_api_errors
from .models import AwsSearchRequest, ImportPreviewRequest, ResourceGroupRequest

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_body(model: Type[M]) -> M:
    """Validate the JSON request body against a pydantic model."""
    if not request.is_json:
        raise ValidationError("Content-Type must be application/json")
    data: Optional[Dict[str, Any]] = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Invalid JSON payload")
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the importer Flask application.

    Args:
        settings: Settings, the cached instance when omitted

    Returns:
        Configured Flask application
    """
    settings = settings or get_settings()
    app = Flask(__name__)
    CORS(app, origins=settings.get_cors_origins())
    handle_api_errors(app)

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/pulumi-version")
    def pulumi_version():
        return jsonify(services.get_pulumi_version().to_dict())

    @app.route("/api/aws/caller-identity")
    def aws_caller_identity():
        return jsonify(services.get_caller_identity().to_dict())

    @app.route("/api/aws/search", methods=["POST"])
    def search_aws():
        body = parse_body(AwsSearchRequest)
        result = services.search_aws(body.queryString, body.tags, settings=settings)
        return jsonify(result.to_dict())

    @app.route("/api/azure/resource-groups")
    def resource_groups():
        return jsonify(services.get_resource_groups(settings=settings).to_dict())

    @app.route("/api/azure/account")
    def azure_account():
        return jsonify(services.azure_account().to_dict())

    @app.route("/api/azure/resource-group-resources", methods=["POST"])
    def resource_group_resources():
        body = parse_body(ResourceGroupRequest)
        result = services.get_resources_under_resource_group(body.resourceGroupName, settings=settings)
        return jsonify(result.to_dict())

    @app.route("/api/import-preview", methods=["POST"])
    def import_preview():
        body = parse_body(ImportPreviewRequest)
        result = services.import_preview(body.language, body.pulumiImportJson, settings=settings)
        return jsonify(result.to_dict())

    return app
