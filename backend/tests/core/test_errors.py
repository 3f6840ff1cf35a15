"""Error Hierarchy — envelope shape and upstream status mapping."""

from bff.core.errors import (
    BadRequestError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    ServiceUnavailableError,
    UnauthorizedError,
    UpstreamError,
    error_from_upstream,
)


def test_envelope_omits_errors_when_absent():
    assert NotFoundError("Property not found").to_response() == {
        "message": "Property not found",
        "statusCode": 404,
    }


def test_envelope_includes_field_errors():
    err = BadRequestError("Missing required fields", errors=["name is required"])
    assert err.to_response() == {
        "message": "Missing required fields",
        "statusCode": 400,
        "errors": ["name is required"],
    }


def test_service_unavailable_names_the_service():
    err = ServiceUnavailableError("Orchestrator")
    assert err.http_status == 503
    assert err.message == "Orchestrator service is unavailable"
    assert err.context.service == "Orchestrator"


def test_internal_error_defaults_to_generic_message():
    assert InternalError().to_response() == {
        "message": "Internal server error",
        "statusCode": 500,
    }


def test_upstream_statuses_map_to_typed_errors():
    assert isinstance(error_from_upstream(400, "bad"), BadRequestError)
    assert isinstance(error_from_upstream(401, "no"), UnauthorizedError)
    assert isinstance(error_from_upstream(403, "no"), ForbiddenError)
    assert isinstance(error_from_upstream(404, "gone"), NotFoundError)


def test_other_upstream_statuses_pass_through():
    err = error_from_upstream(409, "Matrícula já cadastrada", ["matriculaId"], "Orchestrator")
    assert isinstance(err, UpstreamError)
    assert err.to_response() == {
        "message": "Matrícula já cadastrada",
        "statusCode": 409,
        "errors": ["matriculaId"],
    }
    assert err.context.service == "Orchestrator"
