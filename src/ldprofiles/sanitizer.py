"""
Input Sanitizer

Cleans candidate documents before validation and reports what was removed:

- HTML markup stripped from text fields (script/style bodies dropped)
- javascript: and data: URLs rejected
- Emails, phone numbers, SKUs and language codes checked against patterns
- Dates normalized to ISO 8601
- Nested objects (author, publisher, offers, ...) cleaned recursively

The original document is never modified; sanitize_structured_data works on
a deep copy so the two can be compared afterwards.
"""

import copy
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ldprofiles.config import SanitizerConfig
from ldprofiles.constants import (
    DATA_URI_PATTERN,
    DATE_FIELDS,
    DATE_ONLY_PATTERN,
    EMAIL_PATTERN,
    HTML_TAG_PATTERN,
    JAVASCRIPT_PROTOCOL_PATTERN,
    LANGUAGE_CODE_PATTERN,
    NESTED_OBJECT_FIELDS,
    PHONE_PATTERN,
    SECURITY_SEVERITY_HIGH,
    SECURITY_SEVERITY_MEDIUM,
    SKU_PATTERN,
    STRING_ARRAY_FIELDS,
    STRING_FIELDS,
    URL_FIELDS,
    WHITESPACE_PATTERN,
)
from ldprofiles.models import SecurityWarning

logger = logging.getLogger(__name__)

_REMOVED = object()


class InputSanitizer:
    """Sanitize strings, URLs, dates and whole structured-data documents."""

    def __init__(self, config: Optional[SanitizerConfig] = None):
        """
        Initialize the sanitizer.

        Args:
            config: Length limits and allow-lists; defaults apply when omitted
        """
        self.config = config or SanitizerConfig()

    # ------------------------------------------------------------------
    # Scalar sanitizers
    # ------------------------------------------------------------------

    def sanitize_string(
        self,
        value: Any,
        max_length: Optional[int] = None,
        allow_html: bool = False,
        normalize_whitespace: bool = True,
    ) -> str:
        """
        Clean a text value.

        Args:
            value: Input value; None becomes an empty string
            max_length: Truncation length (defaults to config.max_string_length)
            allow_html: Keep markup other than <script>/<style> elements
            normalize_whitespace: Collapse whitespace runs to single spaces

        Returns:
            Sanitized string
        """
        if value is None:
            return ''

        text = str(value).strip()

        limit = max_length or self.config.max_string_length
        if len(text) > limit:
            text = text[:limit]

        if '<' in text:
            text = self._strip_markup(text, keep_tags=allow_html)

        text = JAVASCRIPT_PROTOCOL_PATTERN.sub('', text)

        if not allow_html:
            # Stray angle brackets left after tag removal
            text = text.replace('<', '&lt;').replace('>', '&gt;')

        if normalize_whitespace:
            text = WHITESPACE_PATTERN.sub(' ', text)

        return text.strip()

    def _strip_markup(self, text: str, keep_tags: bool) -> str:
        soup = BeautifulSoup(text, 'html.parser')
        for tag in soup(['script', 'style']):
            tag.decompose()
        return str(soup) if keep_tags else soup.get_text()

    def sanitize_url(self, url: Any) -> Optional[str]:
        """Return a cleaned URL, or None when it is unusable or dangerous."""
        if not url or not isinstance(url, str):
            return None

        if DATA_URI_PATTERN.match(url) or JAVASCRIPT_PROTOCOL_PATTERN.search(url):
            return None

        cleaned = self.sanitize_string(url, max_length=self.config.max_url_length)
        if not cleaned:
            return None

        parsed = urlparse(cleaned)
        scheme = parsed.scheme.lower()
        if scheme not in self.config.allowed_url_schemes:
            return None
        if scheme in ('http', 'https') and not parsed.netloc:
            return None

        return cleaned

    def sanitize_email(self, email: Any) -> Optional[str]:
        if not email or not isinstance(email, str):
            return None

        cleaned = self.sanitize_string(email, max_length=self.config.max_email_length)
        if not EMAIL_PATTERN.match(cleaned):
            return None
        return cleaned.lower()

    def sanitize_phone(self, phone: Any) -> Optional[str]:
        if not phone or not isinstance(phone, str):
            return None

        cleaned = self.sanitize_string(phone, max_length=self.config.max_phone_length)
        if not PHONE_PATTERN.match(cleaned):
            return None
        return cleaned

    def sanitize_language_code(self, language: Any) -> Optional[str]:
        if not language or not isinstance(language, str):
            return None

        cleaned = self.sanitize_string(language, max_length=self.config.max_language_code_length)
        if not LANGUAGE_CODE_PATTERN.match(cleaned):
            return None
        return cleaned

    def sanitize_sku(self, sku: Any) -> Optional[str]:
        if not sku or not isinstance(sku, str):
            return None

        cleaned = self.sanitize_string(sku, max_length=self.config.max_sku_length)
        if not SKU_PATTERN.match(cleaned):
            return None
        return cleaned

    def sanitize_number(
        self,
        value: Any,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        decimals: Optional[int] = None,
    ) -> Optional[Union[int, float]]:
        """
        Coerce a value to a finite number within bounds.

        Returns:
            The number (rounded when decimals is given), or None
        """
        if value is None or isinstance(value, bool):
            return None

        try:
            number = float(value)
        except (TypeError, ValueError):
            return None

        if not math.isfinite(number):
            return None
        if minimum is not None and number < minimum:
            return None
        if maximum is not None and number > maximum:
            return None

        if decimals is not None:
            return round(number, decimals)
        if isinstance(value, int) or number.is_integer():
            return int(number)
        return number

    def sanitize_date(self, value: Any, target_format: Optional[str] = None) -> Optional[str]:
        """
        Normalize a date or date-time to ISO 8601.

        With target_format "date-time" a date-only value becomes midnight UTC;
        with "date" a date-time keeps only its date. Without a target the
        input's own shape is kept. Naive date-times are taken as UTC.
        Years outside [min_year, now + max_years_ahead] are rejected.
        """
        if not value:
            return None

        if isinstance(value, datetime):
            parsed: Union[date, datetime] = value
        elif isinstance(value, date):
            parsed = value
        elif isinstance(value, str):
            text = self.sanitize_string(value)
            try:
                if DATE_ONLY_PATTERN.match(text):
                    parsed = date.fromisoformat(text)
                else:
                    parsed = datetime.fromisoformat(text)
            except ValueError:
                return None
        else:
            return None

        max_year = datetime.now(timezone.utc).year + self.config.max_years_ahead
        if parsed.year < self.config.min_year or parsed.year > max_year:
            return None

        if target_format == 'date' and isinstance(parsed, datetime):
            parsed = parsed.date()
        elif target_format == 'date-time' and not isinstance(parsed, datetime):
            parsed = datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)

        if isinstance(parsed, datetime):
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.isoformat().replace('+00:00', 'Z')
        return parsed.isoformat()

    def sanitize_string_array(self, values: Any) -> List[str]:
        """Clean each item of a string list, dropping items that end up empty."""
        if not isinstance(values, list):
            return []

        cleaned = [self.sanitize_string(item) for item in values[:self.config.max_array_items]]
        return [item for item in cleaned if item]

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def sanitize_structured_data(self, data: Any, date_formats: Optional[Dict[str, str]] = None) -> dict:
        """
        Return a sanitized deep copy of a structured-data document.

        Fields whose value is rejected outright (bad URL, unparseable date,
        malformed email, ...) are left out of the copy.

        Args:
            data: Document to clean
            date_formats: Top-level date fields mapped to their declared
                format ("date" or "date-time")
        """
        if not isinstance(data, dict):
            return {}

        sanitized = copy.deepcopy(data)
        self._sanitize_in_place(sanitized, date_formats)
        return sanitized

    def _sanitize_in_place(self, data: dict, date_formats: Optional[Dict[str, str]] = None) -> None:
        date_formats = date_formats or {}
        dropped = []

        def apply(field_name: str, cleaner) -> None:
            if field_name not in data or data[field_name] is None:
                return
            value = cleaner(data[field_name])
            if value is None:
                del data[field_name]
                dropped.append(field_name)
            else:
                data[field_name] = value

        for field_name in STRING_FIELDS:
            if isinstance(data.get(field_name), str):
                data[field_name] = self.sanitize_string(data[field_name])

        for field_name in URL_FIELDS:
            if isinstance(data.get(field_name), str):
                apply(field_name, self.sanitize_url)

        apply('inLanguage', self.sanitize_language_code)
        apply('telephone', self.sanitize_phone)
        apply('email', self.sanitize_email)
        apply('sku', self.sanitize_sku)

        for field_name in dict.fromkeys((*DATE_FIELDS, *date_formats)):
            target_format = date_formats.get(field_name)
            apply(field_name, lambda v: self.sanitize_date(v, target_format))

        # Only numeric values are bounded; numeric strings keep their type
        if isinstance(data.get('wordCount'), (int, float)):
            apply('wordCount', lambda v: self.sanitize_number(v, minimum=0, maximum=1000000))
        if isinstance(data.get('price'), (int, float)):
            apply('price', lambda v: self.sanitize_number(v, minimum=0, decimals=2))

        for field_name in NESTED_OBJECT_FIELDS:
            value = data.get(field_name)
            if isinstance(value, dict):
                self._sanitize_in_place(value)
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, dict):
                        self._sanitize_in_place(item)

        for field_name in STRING_ARRAY_FIELDS:
            if isinstance(data.get(field_name), list):
                data[field_name] = self.sanitize_string_array(data[field_name])

        if dropped:
            logger.debug(f"Sanitizer dropped fields: {', '.join(dropped)}")

    # ------------------------------------------------------------------
    # Security deltas
    # ------------------------------------------------------------------

    def check_security_issues(self, original: Any, sanitized: Any) -> List[SecurityWarning]:
        """
        Compare a document with its sanitized copy and report removed content.

        Returns:
            Warnings for stripped HTML tags, javascript: URLs and data: URIs
        """
        warnings: List[SecurityWarning] = []
        self._compare(original, sanitized, '', warnings)
        return warnings

    def _compare(self, original: Any, sanitized: Any, path: str, warnings: List[SecurityWarning]) -> None:
        if isinstance(original, dict):
            sanitized_map = sanitized if isinstance(sanitized, dict) else {}
            for key, value in original.items():
                child_path = f"{path}.{key}" if path else str(key)
                self._compare_value(value, sanitized_map.get(key, _REMOVED), child_path, warnings)
        elif isinstance(original, list):
            sanitized_list = sanitized if isinstance(sanitized, list) else []
            for index, value in enumerate(original):
                other = sanitized_list[index] if index < len(sanitized_list) else _REMOVED
                self._compare_value(value, other, f"{path}[{index}]", warnings)

    def _compare_value(self, original: Any, sanitized: Any, path: str, warnings: List[SecurityWarning]) -> None:
        if isinstance(original, (dict, list)):
            if sanitized is not _REMOVED:
                self._compare(original, sanitized, path, warnings)
            return

        if not isinstance(original, str):
            return

        cleaned = sanitized if isinstance(sanitized, str) else ''

        tags = HTML_TAG_PATTERN.findall(original)
        removed_tags = [tag for tag in tags if tag not in cleaned]
        if removed_tags:
            warnings.append(SecurityWarning(
                field=path,
                message=f"HTML tags removed from field: {', '.join(removed_tags)}",
                severity=SECURITY_SEVERITY_MEDIUM,
            ))

        if 'javascript:' in original.lower() and 'javascript:' not in cleaned.lower():
            warnings.append(SecurityWarning(
                field=path,
                message='JavaScript protocol removed from URL',
                severity=SECURITY_SEVERITY_HIGH,
            ))

        if 'data:' in original.lower() and 'data:' not in cleaned.lower():
            warnings.append(SecurityWarning(
                field=path,
                message='Data URI removed from URL',
                severity=SECURITY_SEVERITY_MEDIUM,
            ))
