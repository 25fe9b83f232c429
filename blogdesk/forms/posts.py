from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import BooleanField, SelectField, StringField, SubmitField, TextAreaField, URLField
from wtforms.validators import URL, DataRequired, Length


class PostForm(FlaskForm):
    title = StringField(
        'Title',
        validators=[
            DataRequired(message='Title is required'),
            Length(max=200, message='Title must be at most 200 characters')
        ],
    )
    category = SelectField(
        'Category',
        validators=[DataRequired(message='Category is required')],
        choices=[],  # Will be populated dynamically
    )
    content = TextAreaField(
        'Content',
        validators=[DataRequired(message='Content is required')],
        render_kw={'rows': 6}
    )
    image_url = URLField(
        'Image URL',
        validators=[
            DataRequired(message='Image URL is required'),
            URL(require_tld=False, message='Enter a valid image URL'),
            Length(max=2048),
        ],
        render_kw={'placeholder': 'https://example.com/image.jpg'}
    )
    submit = SubmitField('Save Post')

    def set_category_choices(self, names: list[str], *, placeholder: bool) -> None:
        choices = [(name, name) for name in names]
        if placeholder:
            choices.insert(0, ('', 'Select a category'))
        self.category.choices = choices


class DeletePostForm(FlaskForm):
    confirm = BooleanField(
        'I understand this post will be permanently deleted',
        validators=[DataRequired(message='Please confirm the deletion')]
    )
    submit = SubmitField('Delete')
