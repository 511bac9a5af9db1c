import getpass

from passport_connectors.core.config import get_application_id
from passport_connectors.core.response import ResponseOutcome
from passport_connectors.passport.api_client import PassportClient
from passport_connectors.passport.schema import Errors, LoginResponse


def login(client: PassportClient, email: str, password: str, application_id: str = "") -> str:
    """
    Login Passport et retourne le message à afficher.
    Pas de cookie ni de persistance : on affiche simplement le résultat.
    """
    request = {"email": email, "password": password}
    if application_id:
        request["applicationId"] = application_id

    response = client.login(request)

    if response.was_successful():
        result = response.success_as(LoginResponse)
        if result is None or result.user is None:
            two_factor_id = result.two_factor_id if result else None
            return f"🔐 Code two-factor requis (twoFactorId={two_factor_id})"
        name = result.user.first_name or result.user.email
        return f"👋 Hello, {name}!\n🔑 token: {result.token}"

    if response.outcome == ResponseOutcome.APPLICATION_ERROR:
        errors = response.error_as(Errors)
        codes = ", ".join(errors.codes()) if errors else "aucun détail"
        return f"❌ Login refusé (HTTP {response.status}) : {codes}"

    return f"⚠️ Passport indisponible : {response.exception}"


def main():

# Main pour tester un login Passport depuis la console

    client = PassportClient.from_env()

    email = input("📧 E-Mail : ").strip()
    password = getpass.getpass("🔒 Password : ")

    print(f"\n⏳ Login de {email} sur {client.base_url}...\n")
    print(login(client, email, password, get_application_id()))


if __name__ == "__main__":
    main()
