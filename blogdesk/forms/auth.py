from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import EmailField, PasswordField, SubmitField
from wtforms.validators import DataRequired, Length


class LoginForm(FlaskForm):
    email = EmailField(
        'Email',
        validators=[
            DataRequired(message='Email is required'),
            Length(min=3, max=254, message='Email must be between 3 and 254 characters')
        ],
        render_kw={'autocomplete': 'username'}
    )
    password = PasswordField(
        'Password',
        validators=[
            DataRequired(message='Password is required'),
            Length(max=256, message='Password must be at most 256 characters')
        ],
        render_kw={'autocomplete': 'current-password'}
    )
    submit = SubmitField('Sign In')


class LogoutForm(FlaskForm):
    submit = SubmitField('Logout')
