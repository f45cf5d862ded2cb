"""
Validation utilities for request payloads.
Collects field errors in a fixed order and raises a single ValidationFailedError per request.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple
from email_validator import validate_email, EmailNotValidError

from estate_api.utils.exceptions import ValidationFailedError


# Rule kinds for property fields
FILLED = "filled"    # key supplied, not null, not a blank string
PRESENT = "present"  # key supplied; null and zero are accepted


class ValidationUtils:
    """
    Utility class for payload validation.
    Rules are plain data so the checked field order is explicit.
    """

    IMAGE_DATA_URL_PREFIX = "data:image/"

    PROPERTY_FIELD_RULES: Tuple[Tuple[str, str, str], ...] = (
        ("title", "Title", FILLED),
        ("description", "Description", FILLED),
        ("price", "Price", FILLED),
        ("address", "Address", FILLED),
        ("city", "City", FILLED),
        ("state", "State", FILLED),
        ("zip_code", "Zip code", FILLED),
        ("latitude", "Latitude", PRESENT),
        ("longitude", "Longitude", PRESENT),
        ("type", "Property type", FILLED),
        ("beds", "Bedrooms count", PRESENT),
        ("baths", "Bathrooms count", PRESENT),
        ("sqft", "Square footage", PRESENT),
    )

    MIN_RATING = 1
    MAX_RATING = 5

    @staticmethod
    def is_filled(value: Any) -> bool:
        """Check that a value is supplied and not blank. Zero counts as supplied."""
        if value is None:
            return False
        if isinstance(value, str) and not value.strip():
            return False
        return True

    @staticmethod
    def validate_property_fields(values: Mapping[str, Any], provided: Iterable[str]) -> List[str]:
        """
        Check required property fields.

        Args:
            values: Field values from the request body
            provided: Names of the fields the client actually sent

        Returns:
            Ordered list of error messages, empty when all fields pass
        """
        provided = set(provided)
        errors = []

        for field, label, rule in ValidationUtils.PROPERTY_FIELD_RULES:
            if rule == PRESENT:
                ok = field in provided
            else:
                ok = field in provided and ValidationUtils.is_filled(values.get(field))

            if not ok:
                errors.append(f"{label} is required")

        return errors

    @staticmethod
    def validate_images(images: Any) -> Optional[str]:
        """
        Check the listing images.

        Returns:
            A single error message, or None when the images are valid
        """
        if not isinstance(images, list) or len(images) == 0:
            return "At least one image is required"

        prefix = ValidationUtils.IMAGE_DATA_URL_PREFIX
        invalid = [img for img in images if not isinstance(img, str) or not img.startswith(prefix)]
        if invalid:
            return "All images must be valid base64 data URLs"

        return None

    @staticmethod
    def validate_property(values: Mapping[str, Any], provided: Iterable[str]) -> None:
        """
        Validate a property create/update payload.

        Raises:
            ValidationFailedError: With the field error list, or with the
                image error when every field passed
        """
        errors = ValidationUtils.validate_property_fields(values, provided)
        if errors:
            raise ValidationFailedError(errors=errors)

        image_error = ValidationUtils.validate_images(values.get("images"))
        if image_error:
            raise ValidationFailedError(image_error)

    @staticmethod
    def validate_review(review: Optional[str], rating: Optional[int]) -> None:
        """
        Validate a review payload.
        A rating of 0 is a supplied value and fails the range check.

        Raises:
            ValidationFailedError: If review text or rating is missing or out of range
        """
        if not ValidationUtils.is_filled(review) or rating is None:
            raise ValidationFailedError("Review and rating are required")

        if rating < ValidationUtils.MIN_RATING or rating > ValidationUtils.MAX_RATING:
            raise ValidationFailedError(
                f"Rating must be between {ValidationUtils.MIN_RATING} and {ValidationUtils.MAX_RATING}"
            )

    @staticmethod
    def normalize_email(email: str) -> str:
        """
        Canonical form of an email for storage and lookup.
        Matches what signup stores; malformed input is only trimmed and lowercased.
        """
        try:
            valid_email = validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return email.strip().lower()
        return valid_email.normalized.lower()

    @staticmethod
    def validate_email_address(email: str) -> str:
        """
        Validate email syntax without DNS lookups.

        Returns:
            Normalized lowercase email

        Raises:
            ValidationFailedError: If the address is malformed
        """
        try:
            valid_email = validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            raise ValidationFailedError("Invalid email format")
        return valid_email.normalized.lower()

    @staticmethod
    def validate_signup(name: Optional[str], email: Optional[str], password: Optional[str]) -> str:
        """
        Validate a signup payload.

        Returns:
            Normalized email

        Raises:
            ValidationFailedError: If a field is missing or the email is malformed
        """
        if not all(ValidationUtils.is_filled(v) for v in (name, email, password)):
            raise ValidationFailedError("All fields are required")

        return ValidationUtils.validate_email_address(email)
