import re


def snake_case_to_camel_case(value):
    value = value.rstrip("_")
    return value[:1].lower() + re.sub(r"_(.)", lambda match: match.group(1).upper(), value[1:])
