"""User profile management: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import Gender, User
from storefront.shared.lookups import load_actor


@storefront.command(part_of="User")
class UpdateProfile:
    """Change contact details. Fields left empty keep their current value."""

    user_id = Identifier(required=True)
    email = String(max_length=254)
    gender = String(choices=Gender)


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        user = load_actor(command.user_id)
        repo = current_domain.repository_for(User)

        changes = {}
        if command.email and command.email != user.email:
            owner = repo.find_by_email(command.email)
            if owner is not None and str(owner.id) != str(user.id):
                raise ValidationError({"email": ["Username or email already exists"]})
            changes["email"] = command.email
        if command.gender:
            changes["gender"] = command.gender

        if not changes:
            return

        user.update_profile(**changes)
        repo.add(user)

        logger.info("Profile updated", user_id=str(user.id), fields=sorted(changes))
