"""
Upload Validation

Checks an uploaded export BEFORE it reaches the parser:
- Filename extension is one we accept
- Payload is not empty
- Payload is within the configured size limit

Content is not inspected here. Whether the bytes are a usable
transaction export is the parser's call, and it fails loudly.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the caller can reject the upload.
"""

from typing import Optional

from paypal_liquidity.config import UploadSettings, get_settings
from paypal_liquidity.models.transaction import UploadValidationResult, ValidationIssue


class UploadValidator:
    """Validates upload metadata against the configured limits."""

    def __init__(
        self,
        settings: Optional[UploadSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            settings: Upload limits. Defaults to the application settings.
        """
        self._settings = settings or get_settings().upload

    def _validate_filename(self, filename: str) -> list[ValidationIssue]:
        issues = []
        name = filename.strip().lower()

        if not name:
            issues.append(ValidationIssue(
                field="filename",
                issue_type="missing",
                message="Uploaded file has no name",
                severity="error",
                suggested_fix="Upload the export file directly",
            ))
            return issues

        allowed = self._settings.allowed_extensions_list
        # The name must be more than just the extension itself
        if not any(
            name.endswith(f".{ext}") and len(name) > len(ext) + 1
            for ext in allowed
        ):
            allowed_str = ", ".join(f".{ext}" for ext in allowed)
            issues.append(ValidationIssue(
                field="filename",
                issue_type="invalid_extension",
                message=f"File must have one of these extensions: {allowed_str}",
                severity="error",
                suggested_fix="Export the transactions as CSV and upload that file",
            ))

        return issues

    def _validate_size(self, size_bytes: int) -> list[ValidationIssue]:
        issues = []

        if size_bytes == 0:
            issues.append(ValidationIssue(
                field="file_size",
                issue_type="empty",
                message="Uploaded file is empty",
                severity="error",
                suggested_fix="Check that the export finished before uploading",
            ))
        elif size_bytes > self._settings.max_upload_size_bytes:
            issues.append(ValidationIssue(
                field="file_size",
                issue_type="too_large",
                message=(
                    f"File is {size_bytes / (1024 * 1024):.1f} MB; "
                    f"the limit is {self._settings.max_upload_size_mb} MB"
                ),
                severity="error",
                suggested_fix="Export a shorter date range",
            ))

        return issues

    def validate(self, filename: str, size_bytes: int) -> UploadValidationResult:
        """
        Run all upload checks.

        Args:
            filename: Name the file was uploaded under
            size_bytes: Payload size

        Returns:
            UploadValidationResult with all issues found
        """
        issues = self._validate_filename(filename)
        issues.extend(self._validate_size(size_bytes))

        return UploadValidationResult(
            filename=filename,
            file_size_bytes=size_bytes,
            issues=issues,
        )

    def get_user_friendly_summary(self, result: UploadValidationResult) -> str:
        """Summarize a validation result for display."""
        if result.is_valid:
            return "File accepted."

        lines = ["File rejected:"]
        for issue in result.issues:
            if issue.severity == "error":
                lines.append(f"   • {issue.message}")
                if issue.suggested_fix:
                    lines.append(f"     {issue.suggested_fix}")
        return "\n".join(lines)
