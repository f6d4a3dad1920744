"""
Request schemas for every secured endpoint.

Each schema is an allow-list: in strict mode any key not declared here
rejects the whole request.
"""

from .validation import Check, FieldRule, FieldType, SanitizeMode, define_schema

AUDIENCES = ("youth", "adults", "mixed")
TEACHING_STYLES = ("narrative", "expository", "teaching")
CULTURAL_CONTEXTS = ("global", "african", "nigerian")
TONES = ("encouraging", "corrective", "prophetic")
LENGTHS = ("short", "medium", "long")
CONTENT_TYPES = ("sermon", "study")
REGENERATABLE_SECTIONS = ("introduction", "illustrations", "application", "points", "full")
FEEDBACK_TYPES = ("feedback", "complaint")

SERMON_OPTIONS_SCHEMA = define_schema(
    audience=FieldRule(FieldType.STRING, enum=AUDIENCES),
    teachingStyle=FieldRule(FieldType.STRING, enum=TEACHING_STYLES),
    culturalContext=FieldRule(FieldType.STRING, enum=CULTURAL_CONTEXTS),
    tone=FieldRule(FieldType.STRING, enum=TONES),
    length=FieldRule(FieldType.STRING, enum=LENGTHS),
)

GENERATION_SCHEMA = define_schema(
    input=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=2000,
        sanitize=SanitizeMode.TEXT,
    ),
    mode=FieldRule(FieldType.STRING, required=True, enum=CONTENT_TYPES),
    sermonOptions=FieldRule(FieldType.OBJECT, schema=SERMON_OPTIONS_SCHEMA),
)

OUTLINE_SCHEMA = define_schema(
    topic=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=2000,
        sanitize=SanitizeMode.TEXT,
    ),
    targetAudience=FieldRule(FieldType.STRING, max_length=100, sanitize=SanitizeMode.TEXT),
    duration=FieldRule(FieldType.STRING, max_length=50, sanitize=SanitizeMode.TEXT),
)

REWRITE_SCHEMA = define_schema(
    originalContent=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=50_000,
        sanitize=SanitizeMode.HTML,
    ),
    newStyle=FieldRule(FieldType.STRING, max_length=100, sanitize=SanitizeMode.TEXT),
    instructions=FieldRule(FieldType.STRING, max_length=1000, sanitize=SanitizeMode.TEXT),
)

SAVE_CONTENT_SCHEMA = define_schema(
    title=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=200,
        sanitize=SanitizeMode.TEXT,
    ),
    content=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=50_000,
        sanitize=SanitizeMode.HTML,
    ),
    content_type=FieldRule(FieldType.STRING, required=True, enum=CONTENT_TYPES),
    topic=FieldRule(FieldType.STRING, max_length=500, sanitize=SanitizeMode.TEXT),
    bible_verse=FieldRule(FieldType.STRING, max_length=200, sanitize=SanitizeMode.TEXT),
    style=FieldRule(FieldType.STRING, max_length=100, sanitize=SanitizeMode.TEXT),
    structured_data=FieldRule(FieldType.STRING, max_length=100_000, check=Check.JSON),
)

UPDATE_CONTENT_SCHEMA = define_schema(
    id=FieldRule(FieldType.STRING, required=True, check=Check.UUID),
    title=FieldRule(
        FieldType.STRING,
        min_length=1,
        max_length=200,
        sanitize=SanitizeMode.TEXT,
    ),
    content=FieldRule(
        FieldType.STRING,
        min_length=1,
        max_length=50_000,
        sanitize=SanitizeMode.HTML,
    ),
    topic=FieldRule(FieldType.STRING, max_length=500, sanitize=SanitizeMode.TEXT),
    bible_verse=FieldRule(FieldType.STRING, max_length=200, sanitize=SanitizeMode.TEXT),
    style=FieldRule(FieldType.STRING, max_length=100, sanitize=SanitizeMode.TEXT),
    structured_data=FieldRule(FieldType.STRING, max_length=100_000, check=Check.JSON),
)

DELETE_CONTENT_SCHEMA = define_schema(
    id=FieldRule(FieldType.STRING, required=True, check=Check.UUID),
)

LIST_CONTENT_SCHEMA = define_schema(
    content_type=FieldRule(FieldType.STRING, enum=CONTENT_TYPES),
)

ORIGINAL_INPUTS_SCHEMA = define_schema(
    topic=FieldRule(FieldType.STRING, max_length=2000, sanitize=SanitizeMode.TEXT),
    verse=FieldRule(FieldType.STRING, max_length=200, sanitize=SanitizeMode.TEXT),
    audience=FieldRule(FieldType.STRING, enum=AUDIENCES),
    teachingStyle=FieldRule(FieldType.STRING, enum=TEACHING_STYLES),
    culturalContext=FieldRule(FieldType.STRING, enum=CULTURAL_CONTEXTS),
    tone=FieldRule(FieldType.STRING, enum=TONES),
    length=FieldRule(FieldType.STRING, enum=LENGTHS),
)

REGENERATE_SECTION_SCHEMA = define_schema(
    section=FieldRule(FieldType.STRING, required=True, enum=REGENERATABLE_SECTIONS),
    originalSermon=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=50_000,
        sanitize=SanitizeMode.HTML,
    ),
    originalInputs=FieldRule(FieldType.OBJECT, required=True, schema=ORIGINAL_INPUTS_SCHEMA),
    additionalNote=FieldRule(FieldType.STRING, max_length=500, sanitize=SanitizeMode.TEXT),
)

CHECKOUT_SCHEMA = define_schema(
    priceId=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=200,
        sanitize=SanitizeMode.TEXT,
        check=Check.STRIPE_PRICE_ID,
    ),
    userId=FieldRule(FieldType.STRING, required=True, check=Check.UUID),
    userEmail=FieldRule(FieldType.STRING, required=True, check=Check.EMAIL),
)

PORTAL_SCHEMA = define_schema(
    userId=FieldRule(FieldType.STRING, required=True, check=Check.UUID),
)

FEEDBACK_SCHEMA = define_schema(
    name=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=100,
        sanitize=SanitizeMode.TEXT,
    ),
    email=FieldRule(FieldType.STRING, required=True, check=Check.EMAIL),
    subject=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=200,
        sanitize=SanitizeMode.TEXT,
    ),
    message=FieldRule(
        FieldType.STRING,
        required=True,
        min_length=1,
        max_length=5000,
        sanitize=SanitizeMode.HTML,
    ),
    type=FieldRule(FieldType.STRING, required=True, enum=FEEDBACK_TYPES),
)
