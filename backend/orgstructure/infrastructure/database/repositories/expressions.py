"""SQL expressions shared by the repositories."""

from sqlalchemy import and_, case, func


def filled(column):
    """1 when the column holds a non-blank value, else 0."""
    return case((and_(column.is_not(None), func.trim(column) != ""), 1), else_=0)


def designated_in_several_languages(model):
    """At least two of the model's French/English/Arabic designations are filled."""
    return (
        filled(model.designation_ar) + filled(model.designation_en) + filled(model.designation_fr)
        >= 2
    )
