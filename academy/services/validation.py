from academy.exceptions import ValidationError

# Primary keys are signed 32-bit INT columns on MySQL
MAX_RECORD_ID = 2 ** 31 - 1


def is_record_id(value):
    """True for ints that can be a primary key (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= MAX_RECORD_ID


def parse_record_id(raw_id, message):
    """
    Validate an ID coming from a URL, CLI argument or caller.

    Accepts ints and strings of ASCII digits.

    Raises:
        ValidationError: With ``message`` if the value is not a usable ID
    """
    if isinstance(raw_id, str):
        raw_id = raw_id.strip()
        if not raw_id.isascii() or not raw_id.isdigit():
            raise ValidationError(message)
        raw_id = int(raw_id)

    if not is_record_id(raw_id):
        raise ValidationError(message)
    return raw_id
