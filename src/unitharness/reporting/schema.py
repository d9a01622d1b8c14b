"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

STATUSES = ["passed", "soft_failed", "hard_failed", "crashed"]

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "unitharness report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "soft_failed", "hard_failed", "crashed", "exit_code", "duration_s"],
            "properties": {
                "total": {"type": "integer"},
                "passed": {"type": "integer"},
                "soft_failed": {"type": "integer"},
                "hard_failed": {"type": "integer"},
                "crashed": {"type": "integer"},
                "exit_code": {"type": "integer"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "suite", "name", "status", "duration_ms"],
                "properties": {
                    "id": {"type": "string"},
                    "suite": {"type": "string"},
                    "name": {"type": "string"},
                    "status": {"type": "string", "enum": STATUSES},
                    "duration_ms": {"type": "number"},
                    "message": {"type": "string"},
                    "location": {"type": "string"},
                    "traceback": {"type": "string"},
                },
            },
        },
    },
}
