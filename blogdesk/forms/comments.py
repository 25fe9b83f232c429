from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import SubmitField, TextAreaField


class ReplyForm(FlaskForm):
    reply = TextAreaField('Your Reply', render_kw={'rows': 4})
    submit = SubmitField('Post Reply')


class RefreshForm(FlaskForm):
    submit = SubmitField('Refresh')
