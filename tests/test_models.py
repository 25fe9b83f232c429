"""Tests for row models and the admin session object."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from blogdesk.models import AdminSession, Category, CategorySummary, Comment, Post, PostView
from blogdesk.schemas import CategoryCreate, CommentReply, PostCreate, PostUpdate


class TestPostModel:
    """Test cases for the Post row model."""

    def test_parse_row(self):
        """Test parsing a remote post row."""
        post = Post.model_validate({
            'id': 7,
            'title': 'Hello',
            'content': 'Body',
            'category': 'News',
            'created_at': '2024-05-01T10:00:00+00:00',
            'views': 3,
            'image_url': 'https://img.example/7.jpg',
            'author_id': 'ignored',
        })
        assert post.id == 7
        assert post.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert post.views == 3
        assert not hasattr(post, 'author_id')

    def test_missing_required_field(self):
        """Test a row without created_at is rejected."""
        with pytest.raises(ValidationError):
            Post.model_validate({'id': 1, 'title': 'No date'})

    def test_defaults(self):
        """Test optional columns default sensibly."""
        post = Post.model_validate({'id': 1, 'title': 't', 'created_at': '2024-05-01T00:00:00Z'})
        assert post.views == 0
        assert post.category == ''


class TestCommentModel:
    def test_reply_is_optional(self):
        comment = Comment.model_validate({
            'id': 1, 'post_id': 2, 'author': 'Ana', 'content': 'Hi',
            'created_at': '2024-05-04T08:00:00+00:00',
        })
        assert comment.admin_reply is None


class TestPostViewModel:
    """Test cases for daily view counters."""

    def test_label_uses_short_weekday(self):
        """Test the default label is the abbreviated weekday."""
        view = PostView.model_validate({'date': '2024-05-06', 'views': 4})
        assert view.date == date(2024, 5, 6)
        assert view.label() == 'Mon'

    def test_custom_label_format(self):
        view = PostView(date=date(2024, 5, 6), views=4)
        assert view.label('%d/%m') == '06/05'

    def test_negative_views_rejected(self):
        with pytest.raises(ValidationError):
            PostView.model_validate({'date': '2024-05-06', 'views': -1})


class TestCategorySummary:
    def test_is_stored(self):
        assert CategorySummary(id=1, name='News', post_count=2).is_stored
        assert not CategorySummary(name='Orphan', post_count=1).is_stored

    def test_category_row(self):
        category = Category.model_validate({'id': 3, 'name': 'Tech'})
        assert category.created_at is None


class TestAdminSession:
    """Test cases for the provider session user object."""

    def test_from_token_response(self):
        """Test building a session from a password grant response."""
        admin = AdminSession.from_token_response({
            'access_token': 'a',
            'refresh_token': 'r',
            'expires_at': 123,
            'user': {'id': 'u-1', 'email': 'admin@example.com'},
        })
        assert admin.user_id == 'u-1'
        assert admin.email == 'admin@example.com'
        assert admin.refresh_token == 'r'

    def test_from_token_response_requires_access_token(self):
        with pytest.raises(KeyError):
            AdminSession.from_token_response({'user': {'id': 'u-1'}})

    def test_dict_round_trip(self, admin):
        """Test the session survives storage in the Flask session."""
        assert AdminSession.from_dict(admin.to_dict()) == admin

    def test_from_dict_incomplete(self):
        assert AdminSession.from_dict(None) is None
        assert AdminSession.from_dict({'user_id': 'u-1'}) is None

    def test_flask_login_interface(self, admin):
        """Test Flask-Login sees an authenticated user keyed by provider id."""
        assert admin.get_id() == 'user-1'
        assert admin.is_authenticated
        assert admin.is_active


class TestSchemas:
    """Test cases for inbound payload schemas."""

    def test_post_create_strips_text(self):
        payload = PostCreate(title='  T  ', content='X', category=' C ', image_url=' http://i ')
        assert payload.to_row() == {'title': 'T', 'content': 'X', 'category': 'C', 'image_url': 'http://i'}

    def test_post_create_requires_http_image(self):
        with pytest.raises(ValidationError):
            PostCreate(title='T', content='X', category='C', image_url='ftp://files/i.png')

    def test_post_create_rejects_blank_title(self):
        with pytest.raises(ValidationError):
            PostCreate(title='   ', content='X', category='C', image_url='http://i')

    def test_post_create_rejects_blank_content(self):
        with pytest.raises(ValidationError):
            PostCreate(title='T', content=' \n\t ', category='C', image_url='http://i')

    def test_post_update_carries_views(self):
        update = PostUpdate(title='T', content='X', category='C', image_url='http://i', views=9)
        assert update.model_dump()['views'] == 9

    def test_category_name_trimmed(self):
        assert CategoryCreate(name='  Travel ').name == 'Travel'

    def test_category_name_too_long(self):
        with pytest.raises(ValidationError):
            CategoryCreate(name='x' * 81)

    def test_blank_reply_rejected(self):
        with pytest.raises(ValidationError):
            CommentReply(admin_reply='   ')
