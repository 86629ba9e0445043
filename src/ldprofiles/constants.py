# src/ldprofiles/constants.py
"""Centralized constants for profile validation.

Static lookup tables used by the field metadata resolver, the enricher and
the sanitizer. For user-configurable settings, see config.py.
"""

import re

# =============================================================================
# Field Importance & Categories
# =============================================================================

IMPORTANCE_REQUIRED = "required"
IMPORTANCE_RECOMMENDED = "recommended"
IMPORTANCE_OPTIONAL = "optional"

# Search order for the metadata resolver; earlier tiers win ties
IMPORTANCE_ORDER = (IMPORTANCE_REQUIRED, IMPORTANCE_RECOMMENDED, IMPORTANCE_OPTIONAL)

CATEGORY_BASIC = "basic"
CATEGORY_CONTENT = "content"
CATEGORY_METADATA = "metadata"
CATEGORY_SEO = "seo"
CATEGORY_LLM = "llm"
CATEGORY_RICH_RESULTS = "rich_results"

FIELD_CATEGORIES = {
    # Basic
    '@type': CATEGORY_BASIC,
    '@context': CATEGORY_BASIC,
    'name': CATEGORY_BASIC,
    'description': CATEGORY_BASIC,
    'url': CATEGORY_BASIC,
    'image': CATEGORY_BASIC,

    # Content
    'headline': CATEGORY_CONTENT,
    'articleBody': CATEGORY_CONTENT,
    'keywords': CATEGORY_CONTENT,
    'content': CATEGORY_CONTENT,
    'text': CATEGORY_CONTENT,

    # Metadata
    'author': CATEGORY_METADATA,
    'publisher': CATEGORY_METADATA,
    'datePublished': CATEGORY_METADATA,
    'dateModified': CATEGORY_METADATA,
    'inLanguage': CATEGORY_METADATA,

    # SEO
    'mainEntityOfPage': CATEGORY_SEO,
    'breadcrumb': CATEGORY_SEO,
    'canonical': CATEGORY_SEO,

    # LLM
    'about': CATEGORY_LLM,
    'mentions': CATEGORY_LLM,
    'topics': CATEGORY_LLM,

    # Rich results
    'aggregateRating': CATEGORY_RICH_RESULTS,
    'review': CATEGORY_RICH_RESULTS,
    'offers': CATEGORY_RICH_RESULTS,
}

# JSON-LD header keys left out of field listings and suggestions
HEADER_FIELDS = frozenset({'@type', '@context', '@id'})

# =============================================================================
# Descriptions & Examples
# =============================================================================

DEFAULT_DESCRIPTIONS = {
    'name': 'The name or title of the item',
    'description': 'A description of the item',
    'url': 'The URL of the item',
    'image': 'An image of the item',
    'author': 'The author of the item',
    'publisher': 'The publisher of the item',
    'datePublished': 'The date the item was published',
    'dateModified': 'The date the item was last modified',
    'headline': 'The headline of the article',
    'articleBody': 'The main content of the article',
    'keywords': 'Keywords describing the item',
    'inLanguage': 'The language of the content',
    'mainEntityOfPage': 'The main entity of the page',
}

FIELD_EXAMPLES = {
    'name': ['"My Article Title"', '"Product Name"', '"Event Name"'],
    'description': ['"A brief description of the item"', '"Detailed description with key information"'],
    'url': ['"https://example.com/article"', '"https://example.com/product"'],
    'image': ['"https://example.com/image.jpg"', 'ImageObject with url, width, height'],
    'author': ['"Jane Doe"', 'Person object with name and url'],
    'datePublished': ['"2024-01-01T00:00:00Z"', '"2024-01-01"'],
    'keywords': ['"keyword1, keyword2, keyword3"', '["keyword1", "keyword2"]'],
    'inLanguage': ['"en"', '"en-US"', '"es"'],
    'headline': ['"Breaking News: Important Update"', '"How to Build a Website"'],
}

# Examples synthesized from a field's JSON type; str.format templates, "{name}" is the field name
TYPE_SYNTHESIZED_EXAMPLES = {
    'string': ['"example {name}"'],
    'number': ['123', '45.67'],
    'integer': ['123', '456'],
    'boolean': ['true', 'false'],
    'array': ['["item1", "item2"]', '[]'],
    'object': ['{{}}', 'Object with properties'],
}
FALLBACK_EXAMPLE = 'Example value'

# Literal examples attached to "type" violations
TYPE_EXAMPLES = {
    'string': ['"text value"', '"example"'],
    'number': ['123', '45.67'],
    'integer': ['123', '456'],
    'boolean': ['true', 'false'],
    'array': ['["item1", "item2"]', '[]'],
    'object': ['{}', '{ "property": "value" }'],
}
FALLBACK_TYPE_EXAMPLE = 'Valid value'

# Literal examples attached to "format" violations
FORMAT_EXAMPLES = {
    'date': ['2024-01-01', 'YYYY-MM-DD format'],
    'date-time': ['2024-01-01T00:00:00Z', 'ISO 8601 format'],
    'uri': ['https://example.com', 'Valid URL'],
    'email': ['user@example.com', 'Valid email address'],
    'uri-reference': ['/path', 'Relative or absolute URI'],
}
FALLBACK_FORMAT_EXAMPLE = 'Valid format'

# Hints for a few high-traffic fields: field name -> (suggestion type, title, items)
FIELD_HINTS = {
    'url': ('url-help', 'URL format:', ['https://example.com/path', 'Must be a valid HTTP/HTTPS URL']),
    'image': ('url-help', 'URL format:', ['https://example.com/path', 'Must be a valid HTTP/HTTPS URL']),
    'datePublished': ('date-help', 'Date format:', ['2024-01-01T00:00:00Z', '2024-01-01', 'ISO 8601 format preferred']),
    'dateModified': ('date-help', 'Date format:', ['2024-01-01T00:00:00Z', '2024-01-01', 'ISO 8601 format preferred']),
    'email': ('email-help', 'Email format:', ['user@example.com', 'Must be a valid email address']),
}

# =============================================================================
# Guidance
# =============================================================================

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

# importance -> (message, action, severity)
GUIDANCE = {
    IMPORTANCE_REQUIRED: (
        'This field is required for valid structured data',
        'You must provide a value for this field',
        SEVERITY_ERROR,
    ),
    IMPORTANCE_RECOMMENDED: (
        'This field is recommended for better SEO and rich results',
        'Consider adding this field to improve visibility',
        SEVERITY_WARNING,
    ),
    IMPORTANCE_OPTIONAL: (
        'This field is optional but can enhance your structured data',
        'Add this field if relevant to your content',
        SEVERITY_INFO,
    ),
}

# Extra clause appended to recommended-tier guidance for these fields
RECOMMENDED_GUIDANCE_EXTRAS = {
    'image': 'Images help with rich results and social sharing',
    'description': 'Descriptions improve search result snippets',
    'keywords': 'Keywords help with content categorization',
}

# =============================================================================
# Advisory Priorities
# =============================================================================

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

REASON_RICH_RESULTS = "Important for rich results eligibility"
REASON_LLM = "Optimized for LLM processing"
REASON_GENERAL_SEO = "Recommended for general SEO"

# Numeric priorities used by field suggestions (lower is more urgent)
SUGGESTION_PRIORITY_CRITICAL = 1
SUGGESTION_PRIORITY_IMPORTANT = 2
SUGGESTION_PRIORITY_HELPFUL = 3
SUGGESTION_PRIORITY_OPTIONAL = 4

# =============================================================================
# Sanitizer
# =============================================================================

HTML_TAG_PATTERN = re.compile(r'<[^>]*>')
JAVASCRIPT_PROTOCOL_PATTERN = re.compile(r'javascript:', re.IGNORECASE)
DATA_URI_PATTERN = re.compile(r'^\s*data:', re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r'\s+')

LANGUAGE_CODE_PATTERN = re.compile(r'^[a-z]{2,3}(-[A-Za-z]{2,4})?$', re.IGNORECASE)
PHONE_PATTERN = re.compile(r'^\+?[0-9\s\-().]+$')
SKU_PATTERN = re.compile(r'^[a-zA-Z0-9\-_]+$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
DATE_ONLY_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')

STRING_FIELDS = (
    'name', 'title', 'headline', 'description', 'articleBody',
    'keywords', 'articleSection', 'employmentType', 'priceRange',
    'streetAddress', 'addressLocality', 'addressRegion',
    'addressCountry', 'postalCode', 'reviewBody', 'text',
)
URL_FIELDS = ('url', 'image', 'mainEntityOfPage', 'sameAs', 'logo', 'contentUrl', 'thumbnailUrl', 'hasMap')
DATE_FIELDS = (
    'datePublished', 'dateModified', 'datePosted', 'validThrough',
    'startDate', 'endDate', 'jobStartDate', 'foundingDate',
)
STRING_ARRAY_FIELDS = ('keywords', 'openingHours', 'skills', 'recipeIngredient')

# Nested objects sanitized recursively
NESTED_OBJECT_FIELDS = (
    'author', 'publisher', 'hiringOrganization', 'brand', 'address',
    'location', 'jobLocation', 'organizer', 'image', 'offers',
    'baseSalary', 'aggregateRating', 'reviewRating', 'geo', 'itemReviewed',
    'mainEntity', 'acceptedAnswer',
)

SECURITY_SEVERITY_HIGH = "high"
SECURITY_SEVERITY_MEDIUM = "medium"
