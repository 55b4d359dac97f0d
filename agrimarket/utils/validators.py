# Request validation helpers. Each check appends a {'field', 'message'} entry;
# callers raise ValidationError with every failure at once.
from flask import request

from agrimarket.errors import ValidationError


def get_json_body():
    data = request.get_json(silent=True)
    if data is None:
        if request.get_data(cache=True):
            raise ValidationError('Invalid JSON in request body')
        return {}
    if not isinstance(data, dict):
        raise ValidationError('JSON body must be an object')
    return data


def _error(field, message):
    return {'field': field, 'message': message}


def check_min_length(data, field, min_length, errors, required=True):
    value = data.get(field)
    if value is None:
        if required:
            errors.append(_error(field, f'{field} is required'))
        return None
    if not isinstance(value, str) or len(value) < min_length:
        errors.append(_error(field, f'{field} must be at least {min_length} characters'))
        return None
    return value


def check_not_empty(data, field, errors):
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        errors.append(_error(field, f'{field} is required'))
        return None
    return value


def to_int(value):
    """Parse an integer from an int or a numeric string; None when impossible."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def to_float(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if number != number or number in (float('inf'), float('-inf')):
        return None
    return number


def check_int_range(data, field, errors, minimum=None, maximum=None, required=True):
    value = data.get(field)
    if value is None:
        if required:
            errors.append(_error(field, f'{field} is required'))
        return None
    number = to_int(value)
    if number is None \
            or (minimum is not None and number < minimum) \
            or (maximum is not None and number > maximum):
        errors.append(_error(field, _range_message(field, 'an integer', minimum, maximum)))
        return None
    return number


def check_float_min(data, field, errors, minimum=0, required=True):
    value = data.get(field)
    if value is None:
        if required:
            errors.append(_error(field, f'{field} is required'))
        return None
    number = to_float(value)
    if number is None or number < minimum:
        errors.append(_error(field, _range_message(field, 'a number', minimum, None)))
        return None
    return number


def check_choice(data, field, choices, errors, required=True):
    value = data.get(field)
    if value is None and not required:
        return None
    if value not in choices:
        errors.append(_error(field, f'{field} must be one of: {", ".join(choices)}'))
        return None
    return value


def _range_message(field, kind, minimum, maximum):
    if minimum is not None and maximum is not None:
        return f'{field} must be {kind} between {minimum} and {maximum}'
    if minimum is not None:
        return f'{field} must be {kind} >= {minimum}'
    return f'{field} must be {kind}'


def raise_if_errors(errors):
    if errors:
        raise ValidationError(details=errors)
