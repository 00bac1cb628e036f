"""Constants for record generation."""

# Display field resolution
DESCRIPTIVE_FIELD_TERMS = ("title", "label", "description", "species", "type", "category")
DISPLAY_SEPARATOR = " - "

# Prompt rendering
REFERENCE_SAMPLE_SIZE = 3  # Example records shown per reference field
TO_MANY_PROMPT_RANGE = (1, 3)  # IDs the model is asked to pick per to-many field

# Fields filled in later by automation steps
STEP_OUTPUT_MARKER = "AI-generated field from step"

# Fallback generation
FALLBACK_NUMBER_RANGE = (1, 100)
FALLBACK_DATE_RANGE_DAYS = 365
FALLBACK_TO_MANY_RANGE = (1, 2)
FALLBACK_UNKNOWN_ENUM = "unknown"

# Error reporting
ERROR_MESSAGE_TRUNCATE_LENGTH = 300
DEBUG_DATA_TRUNCATE_LENGTH = 1000
