import logging

from apps.accounts.models import CustomUser
from apps.accounts.services.session_service import SessionService
from apps.verification.choices import Channel
from apps.verification.choices import Purpose
from apps.verification.results import IssueResult
from apps.verification.results import VerifyResult
from apps.verification.services import CodeIssuer
from apps.verification.services import CodeVerifier

logger = logging.getLogger(__name__)


class PasswordlessService:
    """Organizer login: emailed one-time code exchanged for a JWT session."""

    def __init__(
        self,
        issuer: CodeIssuer = None,
        verifier: CodeVerifier = None,
        session_service: SessionService = None,
    ):
        self.issuer = issuer or CodeIssuer()
        self.verifier = verifier or CodeVerifier()
        self.session_service = session_service or SessionService()

    def request_code(self, email: str) -> IssueResult:
        return self.issuer.issue(email, Channel.EMAIL, Purpose.LOGIN)

    def verify_code(self, email: str, code: str) -> VerifyResult:
        """
        Verify a login code; on success the result carries the session tokens.

        Raises:
            InvalidIdentifierError: malformed email
        """
        result = self.verifier.verify(email, Channel.EMAIL, Purpose.LOGIN, code)
        if not result.success:
            logger.warning(f'Login code rejected: {result.reason.value}')
            return result

        tokens = self.session_service.mint(result.identifier)
        return result.with_session(tokens.access, tokens.refresh)

    def get_user(self, email: str) -> CustomUser | None:
        return self.session_service.user_dal.get_by_email(email)

    def logout(self, refresh_token: str) -> None:
        self.session_service.revoke(refresh_token)
