from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField


class CategoryForm(FlaskForm):
    # Emptiness and duplicates are checked by the category service so the
    # admin sees the same messages as API callers.
    name = StringField('New category name', render_kw={'placeholder': 'New category name'})
    submit = SubmitField('Add Category')


class RenameCategoryForm(FlaskForm):
    name = StringField('Category name')
    submit = SubmitField('Rename')


class DeleteCategoryForm(FlaskForm):
    submit = SubmitField('Delete')
