import logging

from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Code-based error definitions
CODE_ERROR_DEFS = {
    "not_found": {
        "template": "No route is mounted at '{path}'.",
        "required_fields": ["path", "status_code"],
    },
    "method_not_allowed": {
        "template": "Method {method} is not allowed for '{path}'.",
        "required_fields": ["method", "path", "status_code"],
    },
    # Add more error types here as needed
}

def render_error(error_type: str, error_data: dict) -> ErrorResponse:
    """
    Render an ErrorResponse from a code-based template, with best-effort context.

    Args:
        error_type: str, e.g. 'not_found', 'method_not_allowed'
        error_data: dict with keys as required by error_type

    Returns:
        ErrorResponse instance
    """
    error_def = CODE_ERROR_DEFS.get(error_type)
    if error_def:
        # Fill in placeholders for anything missing so formatting never fails
        format_data = {k: (v if v is not None else f"<missing {k}>") for k, v in error_data.items()}
        for f in error_def["required_fields"]:
            format_data.setdefault(f, f"<missing {f}>")
        message = error_def["template"].format(**format_data)
    else:
        logger.warning(f"render_error: Unknown error_type '{error_type}', using generic message")
        message = error_data.get("diagnostics") or "An error occurred."

    return ErrorResponse(
        error=error_type.replace('_', ' ').capitalize(),
        message=message,
        status_code=error_data.get("status_code") if error_data.get("status_code") is not None else -1,
        path=error_data.get("path"),
    )
