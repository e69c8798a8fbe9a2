"""Human-readable validation messages, per locale."""

from __future__ import annotations

DEFAULT_LOCALE = "en"

_TEMPLATES: dict[str, dict[str, str]] = {
    "en": {
        "required": "{field} is required",
        "email": "{field} must be a valid email address",
        "min": "{field} must be at least {param} characters",
        "max": "{field} must be at most {param} characters",
        "password": "{field} must be ≥8 characters with uppercase, lowercase, digit, and special character",
        "phone": "{field} must be a valid phone number",
        "username": (
            "{field} must be 3–30 alphanumeric/underscore/hyphen characters, "
            "not leading/trailing with underscore/hyphen"
        ),
    },
    "id": {
        "required": "{field} wajib diisi",
        "email": "{field} harus berupa alamat email yang valid",
        "min": "{field} minimal harus {param} karakter",
        "max": "{field} maksimal harus {param} karakter",
        "password": "{field} harus minimal 8 karakter dengan huruf besar, kecil, angka, dan karakter khusus",
        "phone": "{field} harus berupa nomor telepon yang valid",
        "username": "{field} harus 3-30 karakter, alfanumerik dengan underscore/hyphen (tidak di awal/akhir)",
    },
}

_FALLBACK = {
    "en": "{field} is invalid",
    "id": "{field} tidak valid",
}

SUPPORTED_LOCALES = frozenset(_TEMPLATES)


def normalize_locale(locale: str | None, default: str = DEFAULT_LOCALE) -> str:
    """Reduce ``"id-ID"``, ``"en_US"`` or an Accept-Language value to a supported locale."""
    if not locale:
        return default
    first = locale.split(",", 1)[0].split(";", 1)[0]
    primary = first.replace("_", "-").split("-", 1)[0].strip().lower()
    return primary if primary in SUPPORTED_LOCALES else default


def format_message(tag: str, field: str, param: str | None = None, locale: str | None = None) -> str:
    lang = normalize_locale(locale)
    template = _TEMPLATES[lang].get(tag, _FALLBACK[lang])
    return template.format(field=field, param=param if param is not None else "")
