"""
Tests for the service layer.
Services are exercised directly against the test database with decoded token identities.
"""

import pytest

from estate_api.models.user import UserRole
from estate_api.schemas.property import PropertyPayload
from estate_api.services.auth import AuthService
from estate_api.services.favorite import FavoriteService
from estate_api.services.property import PropertyService
from estate_api.services.review import ReviewService
from estate_api.services.user import UserService
from estate_api.utils.auth import TokenPayload, decode_access_token
from estate_api.utils.exceptions import (
    DuplicateEmailError,
    DuplicateFavoriteError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidFieldValueError,
    InvalidOperationError,
    NotFoundError,
    ValidationFailedError,
)
from tests.conftest import UserFactory, PropertyFactory, DEFAULT_PASSWORD


def identity(user) -> TokenPayload:
    return TokenPayload(id=user.id, email=user.email, role=user.role)


class TestAuthService:
    """Test signup, signin and the bootstrap admin."""

    @pytest.mark.asyncio
    async def test_signup_then_signin(self, db_session, test_settings):
        service = AuthService(db_session, test_settings)

        user, token = await service.signup("Jane", "Jane@Example.com", "secret-pass")
        signed_in, signin_token = await service.signin("jane@example.com", "secret-pass")

        assert user.email == "jane@example.com"
        assert user.role == UserRole.USER
        assert signed_in.id == user.id

        payload = decode_access_token(signin_token, test_settings)
        assert (payload.id, payload.email, payload.role) == (user.id, user.email, UserRole.USER)
        assert decode_access_token(token, test_settings).id == user.id

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, db_session, test_settings):
        service = AuthService(db_session, test_settings)
        await service.signup("Jane", "jane@example.com", "secret")

        with pytest.raises(DuplicateEmailError):
            await service.signup("Jane Again", "JANE@example.com", "other")

    @pytest.mark.asyncio
    async def test_signup_missing_fields(self, db_session, test_settings):
        service = AuthService(db_session, test_settings)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.signup("Jane", "", "secret")

        assert exc_info.value.detail == "All fields are required"

    @pytest.mark.asyncio
    async def test_signup_invalid_email(self, db_session, test_settings):
        with pytest.raises(ValidationFailedError) as exc_info:
            await AuthService(db_session, test_settings).signup("Jane", "not-an-email", "secret")

        assert exc_info.value.detail == "Invalid email format"

    @pytest.mark.asyncio
    async def test_signin_wrong_password(self, db_session, test_settings):
        await UserFactory.create_user(db_session, email="jane@example.com")

        with pytest.raises(InvalidCredentialsError):
            await AuthService(db_session, test_settings).signin("jane@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_signin_unknown_email(self, db_session, test_settings):
        with pytest.raises(InvalidCredentialsError):
            await AuthService(db_session, test_settings).signin("nobody@example.com", DEFAULT_PASSWORD)

    @pytest.mark.asyncio
    async def test_signin_matches_signup_normalization(self, db_session, test_settings):
        service = AuthService(db_session, test_settings)
        address = "jane@\uff45xample.com"

        user, _ = await service.signup("Jane", address, "secret-pass")
        signed_in, _ = await service.signin(address, "secret-pass")

        assert user.email == "jane@example.com"
        assert signed_in.id == user.id

    @pytest.mark.asyncio
    async def test_ensure_admin_user_is_idempotent(self, db_session, test_settings):
        service = AuthService(db_session, test_settings)

        created = await service.ensure_admin_user()
        again = await service.ensure_admin_user()

        assert created is not None
        assert created.role == UserRole.ADMIN
        assert created.email == test_settings.admin_email
        assert again is None

        _, token = await service.signin(test_settings.admin_email, test_settings.admin_password)
        assert decode_access_token(token, test_settings).is_admin


class TestPropertyService:
    """Test listing rules."""

    @pytest.mark.asyncio
    async def test_admin_creates_property(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        payload = PropertyPayload(**PropertyFactory.create_property_data())

        prop = await PropertyService(db_session).create_property(payload, identity(admin))

        assert prop.owner_id == admin.id
        assert prop.images == payload.images

    @pytest.mark.asyncio
    async def test_non_admin_cannot_create(self, db_session):
        user = await UserFactory.create_user(db_session)
        payload = PropertyPayload(**PropertyFactory.create_property_data())
        service = PropertyService(db_session)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.create_property(payload, identity(user))

        assert exc_info.value.detail == "Only admins can add properties"
        assert await service.list_properties() == []

    @pytest.mark.asyncio
    async def test_create_reports_every_missing_field_in_order(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        payload = PropertyPayload(title="Only a title", images=["data:image/png;base64,AA"])

        with pytest.raises(ValidationFailedError) as exc_info:
            await PropertyService(db_session).create_property(payload, identity(admin))

        assert exc_info.value.errors == [
            "Description is required",
            "Price is required",
            "Address is required",
            "City is required",
            "State is required",
            "Zip code is required",
            "Latitude is required",
            "Longitude is required",
            "Property type is required",
            "Bedrooms count is required",
            "Bathrooms count is required",
            "Square footage is required",
        ]

    @pytest.mark.asyncio
    async def test_create_rejects_bad_image(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        data = PropertyFactory.create_property_data(images=["http://example.com/a.png"])
        service = PropertyService(db_session)

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_property(PropertyPayload(**data), identity(admin))

        assert exc_info.value.detail == "All images must be valid base64 data URLs"
        assert await service.list_properties() == []

    @pytest.mark.asyncio
    async def test_create_out_of_range_value(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        data = PropertyFactory.create_property_data(longitude=200)

        with pytest.raises(InvalidFieldValueError) as exc_info:
            await PropertyService(db_session).create_property(PropertyPayload(**data), identity(admin))

        assert exc_info.value.detail == "Invalid longitude value"

    @pytest.mark.asyncio
    async def test_owner_update(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        prop = await PropertyFactory.create_property(db_session, admin.id)
        payload = PropertyPayload(**PropertyFactory.create_property_data(title="Updated"))

        updated = await PropertyService(db_session).update_property(prop.id, payload, identity(admin))

        assert updated.title == "Updated"

    @pytest.mark.asyncio
    async def test_non_owner_update_forbidden_and_row_unchanged(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        stranger = await UserFactory.create_user(db_session)
        prop = await PropertyFactory.create_property(db_session, admin.id, title="Original")
        service = PropertyService(db_session)
        payload = PropertyPayload(**PropertyFactory.create_property_data(title="Hijacked"))

        with pytest.raises(ForbiddenError):
            await service.update_property(prop.id, payload, identity(stranger))

        current = await service.get_property(prop.id)
        assert current["title"] == "Original"

    @pytest.mark.asyncio
    async def test_update_missing_property_is_not_found_before_ownership(self, db_session):
        stranger = await UserFactory.create_user(db_session)
        payload = PropertyPayload()

        with pytest.raises(NotFoundError):
            await PropertyService(db_session).update_property(404, payload, identity(stranger))

    @pytest.mark.asyncio
    async def test_admin_can_update_any_property(self, db_session):
        owner = await UserFactory.create_user(db_session, role=UserRole.ADMIN, email="owner@example.com")
        other_admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN, email="boss@example.com")
        prop = await PropertyFactory.create_property(db_session, owner.id)
        payload = PropertyPayload(**PropertyFactory.create_property_data(price=0))

        updated = await PropertyService(db_session).update_property(prop.id, payload, identity(other_admin))

        assert updated.to_dict()["price"] == 0.0
        assert updated.owner_id == owner.id

    @pytest.mark.asyncio
    async def test_delete_requires_admin(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        user = await UserFactory.create_user(db_session)
        prop = await PropertyFactory.create_property(db_session, admin.id)
        service = PropertyService(db_session)

        with pytest.raises(ForbiddenError) as exc_info:
            await service.delete_property(prop.id, identity(user))
        assert exc_info.value.detail == "Only admins can delete properties"

        deleted = await service.delete_property(prop.id, identity(admin))
        assert deleted.id == prop.id

        with pytest.raises(NotFoundError):
            await service.delete_property(prop.id, identity(admin))


class TestFavoriteService:
    """Test favorite rules."""

    @pytest.mark.asyncio
    async def test_favorite_twice(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        user = await UserFactory.create_user(db_session)
        prop = await PropertyFactory.create_property(db_session, admin.id)
        service = FavoriteService(db_session)

        await service.add_favorite(prop.id, identity(user))
        with pytest.raises(DuplicateFavoriteError):
            await service.add_favorite(prop.id, identity(user))

        assert len(await service.list_favorites(identity(user))) == 1

    @pytest.mark.asyncio
    async def test_favorite_missing_property(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(NotFoundError) as exc_info:
            await FavoriteService(db_session).add_favorite(123, identity(user))

        assert exc_info.value.detail == "Property not found"

    @pytest.mark.asyncio
    async def test_remove_missing_favorite(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(NotFoundError) as exc_info:
            await FavoriteService(db_session).remove_favorite(1, identity(user))

        assert exc_info.value.detail == "Favorite not found"


class TestReviewService:
    """Test review rules."""

    @pytest.mark.asyncio
    async def test_add_and_list_review(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        user = await UserFactory.create_user(db_session, name="Reviewer")
        prop = await PropertyFactory.create_property(db_session, admin.id)
        service = ReviewService(db_session)

        review = await service.add_review(prop.id, "Great", 5, identity(user))
        reviews = await service.list_reviews(prop.id)

        assert review.user_id == user.id
        assert reviews[0]["user_name"] == "Reviewer"
        assert reviews[0]["rating"] == 5

    @pytest.mark.asyncio
    async def test_rating_zero_is_out_of_range(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(ValidationFailedError) as exc_info:
            await ReviewService(db_session).add_review(1, "Meh", 0, identity(user))

        assert exc_info.value.detail == "Rating must be between 1 and 5"

    @pytest.mark.asyncio
    async def test_missing_review_text(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(ValidationFailedError) as exc_info:
            await ReviewService(db_session).add_review(1, "  ", 3, identity(user))

        assert exc_info.value.detail == "Review and rating are required"

    @pytest.mark.asyncio
    async def test_review_missing_property(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(NotFoundError):
            await ReviewService(db_session).add_review(999, "Nice", 4, identity(user))


class TestUserService:
    """Test profile access and admin deletion."""

    @pytest.mark.asyncio
    async def test_user_reads_own_profile_only(self, db_session):
        user = await UserFactory.create_user(db_session, email="me@example.com")
        other = await UserFactory.create_user(db_session, email="you@example.com")
        service = UserService(db_session)

        assert (await service.get_user(user.id, identity(user))).email == "me@example.com"
        with pytest.raises(ForbiddenError):
            await service.get_user(other.id, identity(user))

    @pytest.mark.asyncio
    async def test_admin_reads_any_profile(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        user = await UserFactory.create_user(db_session)
        service = UserService(db_session)

        assert (await service.get_user(user.id, identity(admin))).id == user.id
        with pytest.raises(NotFoundError):
            await service.get_user(user.id + 100, identity(admin))

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)

        with pytest.raises(InvalidOperationError) as exc_info:
            await UserService(db_session).delete_user(admin.id, identity(admin))

        assert exc_info.value.detail == "Cannot delete yourself"

    @pytest.mark.asyncio
    async def test_admin_deletes_user(self, db_session):
        admin = await UserFactory.create_user(db_session, role=UserRole.ADMIN)
        user = await UserFactory.create_user(db_session)
        service = UserService(db_session)

        deleted = await service.delete_user(user.id, identity(admin))

        assert deleted.id == user.id
        assert [u.id for u in await service.list_users(identity(admin))] == [admin.id]

    @pytest.mark.asyncio
    async def test_non_admin_cannot_list_users(self, db_session):
        user = await UserFactory.create_user(db_session)

        with pytest.raises(ForbiddenError) as exc_info:
            await UserService(db_session).list_users(identity(user))

        assert exc_info.value.detail == "Admin access required"
