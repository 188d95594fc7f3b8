"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.authentication import hash_password
from storefront.identity.user import User, UserRole


@storefront.command(part_of="User")
class RegisterUser:
    """Create a buyer or seller account."""

    username = String(required=True, max_length=30)
    password = String(required=True, max_length=128)
    email = String(max_length=254)
    role = String(choices=UserRole, default=UserRole.BUYER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.find_by_username(command.username):
            raise ValidationError({"username": ["Username or email already exists"]})
        if command.email and repo.find_by_email(command.email):
            raise ValidationError({"email": ["Username or email already exists"]})
        if len(command.password) < 6:
            raise ValidationError({"password": ["Password must be at least 6 characters"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password_hash=hash_password(command.password),
            role=command.role,
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
