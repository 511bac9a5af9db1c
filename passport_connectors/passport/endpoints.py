# passport_connectors/passport/endpoints.py

from typing import Any, NamedTuple, Optional, Tuple


class Fixed(NamedTuple):
    """Valeur figée dans la définition de l'endpoint (segment littéral ou paramètre constant)."""
    value: Any


class Endpoint(NamedTuple):
    """
    Une ligne de la table des endpoints Passport.

    - args        : arguments de la méthode générée, dans l'ordre
    - segments    : noms d'arguments ou Fixed(...) ajoutés après l'uri
    - params      : (nom du paramètre d'URL, nom d'argument ou Fixed(...))
    - body        : nom de l'argument encodé en JSON (None si pas de corps)
    - auth        : template du header Authorization, remplace la clé d'API
    """
    name: str
    method: str
    uri: str
    args: Tuple[str, ...] = ()
    segments: Tuple[Any, ...] = ()
    params: Tuple[Tuple[str, Any], ...] = ()
    body: Optional[str] = None
    auth: Optional[str] = None
    doc: str = ""


HARD_DELETE = ("hardDelete", Fixed(True))
REACTIVATE = ("reactivate", Fixed(True))
INACTIVE = ("inactive", Fixed(True))
REPORT_PARAMS = (("applicationId", "application_id"), ("start", "start"), ("end", "end"))
ROLE = Fixed("role")

E = Endpoint

ENDPOINTS: Tuple[Endpoint, ...] = (
    # --- Actions sur les utilisateurs ---
    E("action_user", "POST", "/api/user/action", ("actionee_user_id", "request"),
      segments=("actionee_user_id",), body="request",
      doc="Applique une action à un utilisateur (l'actioner est dans la requête)."),
    E("cancel_action", "DELETE", "/api/user/action", ("action_id", "request"),
      segments=("action_id",), body="request", doc="Annule une action."),
    E("modify_action", "PUT", "/api/user/action", ("action_id", "request"),
      segments=("action_id",), body="request", doc="Modifie une action existante."),
    E("retrieve_action", "GET", "/api/user/action", ("action_id",),
      segments=("action_id",), doc="Récupère une action par son id."),
    E("retrieve_actions", "GET", "/api/user/action", ("user_id",),
      params=(("userId", "user_id"),), doc="Récupère toutes les actions d'un utilisateur."),

    # --- Mots de passe ---
    E("change_password", "POST", "/api/user/change-password", ("verification_id", "request"),
      segments=("verification_id",), body="request",
      doc="Change le mot de passe via l'id de vérification reçu par email."),
    E("change_password_by_identity", "POST", "/api/user/change-password", ("request",),
      body="request", doc="Change le mot de passe via loginId / mot de passe actuel."),
    E("forgot_password", "POST", "/api/user/forgot-password", ("request",),
      body="request", doc="Démarre le workflow de mot de passe oublié."),

    # --- Commentaires ---
    E("comment_on_user", "POST", "/api/user/comment", ("request",),
      body="request", doc="Ajoute un commentaire au compte d'un utilisateur."),
    E("retrieve_user_comments", "GET", "/api/user/comment", ("user_id",),
      segments=("user_id",), doc="Récupère les commentaires d'un utilisateur."),

    # --- Applications ---
    E("create_application", "POST", "/api/application", ("application_id", "request"),
      segments=("application_id",), body="request", doc="Crée une application (id optionnel)."),
    E("retrieve_application", "GET", "/api/application", ("application_id",),
      segments=("application_id",), doc="Récupère une application."),
    E("retrieve_applications", "GET", "/api/application", doc="Récupère toutes les applications."),
    E("retrieve_inactive_applications", "GET", "/api/application",
      params=(INACTIVE,), doc="Récupère les applications désactivées."),
    E("update_application", "PUT", "/api/application", ("application_id", "request"),
      segments=("application_id",), body="request", doc="Met à jour une application."),
    E("deactivate_application", "DELETE", "/api/application", ("application_id",),
      segments=("application_id",), doc="Désactive une application."),
    E("reactivate_application", "PUT", "/api/application", ("application_id",),
      segments=("application_id",), params=(REACTIVATE,), doc="Réactive une application."),
    E("delete_application", "DELETE", "/api/application", ("application_id",),
      segments=("application_id",), params=(HARD_DELETE,),
      doc="Supprime définitivement une application et toutes ses données."),

    # --- Rôles d'application ---
    E("create_application_role", "POST", "/api/application", ("application_id", "role_id", "request"),
      segments=("application_id", ROLE, "role_id"), body="request",
      doc="Crée un rôle pour une application (id de rôle optionnel)."),
    E("update_application_role", "PUT", "/api/application", ("application_id", "role_id", "request"),
      segments=("application_id", ROLE, "role_id"), body="request", doc="Met à jour un rôle."),
    E("delete_application_role", "DELETE", "/api/application", ("application_id", "role_id"),
      segments=("application_id", ROLE, "role_id"),
      doc="Supprime définitivement un rôle, retiré de tous les utilisateurs."),

    # --- Audit logs ---
    E("create_audit_log", "POST", "/api/system/audit-log", ("request",),
      body="request", doc="Crée une entrée d'audit log."),
    E("retrieve_audit_log", "GET", "/api/system/audit-log", ("audit_log_id",),
      segments=("audit_log_id",), doc="Récupère une entrée d'audit log."),
    E("search_audit_logs", "POST", "/api/system/audit-log/search", ("request",),
      body="request", doc="Recherche dans les audit logs."),

    # --- Templates d'email ---
    E("create_email_template", "POST", "/api/email/template", ("email_template_id", "request"),
      segments=("email_template_id",), body="request", doc="Crée un template d'email (id optionnel)."),
    E("retrieve_email_template", "GET", "/api/email/template", ("email_template_id",),
      segments=("email_template_id",), doc="Récupère un template d'email."),
    E("retrieve_email_templates", "GET", "/api/email/template", doc="Récupère tous les templates d'email."),
    E("retrieve_email_template_preview", "POST", "/api/email/template/preview", ("request",),
      body="request", doc="Prévisualise un template d'email."),
    E("update_email_template", "PUT", "/api/email/template", ("email_template_id", "request"),
      segments=("email_template_id",), body="request", doc="Met à jour un template d'email."),
    E("delete_email_template", "DELETE", "/api/email/template", ("email_template_id",),
      segments=("email_template_id",), doc="Supprime un template d'email."),
    E("send_email", "POST", "/api/email/send", ("email_template_id", "request"),
      segments=("email_template_id",), body="request", doc="Envoie un email à partir d'un template."),

    # --- Utilisateurs ---
    E("create_user", "POST", "/api/user", ("user_id", "request"),
      segments=("user_id",), body="request", doc="Crée un utilisateur (id optionnel)."),
    E("retrieve_user", "GET", "/api/user", ("user_id",),
      segments=("user_id",), doc="Récupère un utilisateur par son id."),
    E("retrieve_user_by_email", "GET", "/api/user", ("email",),
      params=(("email", "email"),), doc="Récupère un utilisateur par email."),
    E("retrieve_user_by_login_id", "GET", "/api/user", ("login_id",),
      params=(("loginId", "login_id"),), doc="Récupère un utilisateur par loginId (email ou username)."),
    E("retrieve_user_by_username", "GET", "/api/user", ("username",),
      params=(("username", "username"),), doc="Récupère un utilisateur par username."),
    E("update_user", "PUT", "/api/user", ("user_id", "request"),
      segments=("user_id",), body="request", doc="Met à jour un utilisateur."),
    E("deactivate_user", "DELETE", "/api/user", ("user_id",),
      segments=("user_id",), doc="Désactive un utilisateur."),
    E("reactivate_user", "PUT", "/api/user", ("user_id",),
      segments=("user_id",), params=(REACTIVATE,), doc="Réactive un utilisateur."),
    E("delete_user", "DELETE", "/api/user", ("user_id",),
      segments=("user_id",), params=(HARD_DELETE,),
      doc="Supprime définitivement un utilisateur et toutes ses données."),
    E("deactivate_users", "DELETE", "/api/user/bulk", ("user_ids",),
      params=(("userId", "user_ids"),), doc="Désactive plusieurs utilisateurs."),
    E("delete_users", "DELETE", "/api/user/bulk", ("user_ids",),
      params=(("userId", "user_ids"), HARD_DELETE), doc="Supprime définitivement plusieurs utilisateurs."),
    E("search_users", "GET", "/api/user/search", ("ids",),
      params=(("ids", "ids"),), doc="Récupère les utilisateurs correspondant aux ids."),
    E("search_users_by_query_string", "POST", "/api/user/search", ("request",),
      body="request", doc="Recherche d'utilisateurs par query string."),
    E("import_users", "POST", "/api/user/import", ("request",),
      body="request", doc="Import en masse d'utilisateurs."),
    E("verify_email", "POST", "/api/user/verify-email", ("verification_id",),
      segments=("verification_id",), doc="Confirme l'email via l'id de vérification."),
    E("resend_email_verification", "PUT", "/api/user/verify-email", ("email",),
      params=(("email", "email"),), doc="Renvoie l'email de vérification."),

    # --- Actions utilisateur (définitions) ---
    E("create_user_action", "POST", "/api/user-action", ("user_action_id", "request"),
      segments=("user_action_id",), body="request", doc="Crée une action utilisateur (id optionnel)."),
    E("retrieve_user_action", "GET", "/api/user-action", ("user_action_id",),
      segments=("user_action_id",), doc="Récupère une action utilisateur."),
    E("retrieve_user_actions", "GET", "/api/user-action", doc="Récupère toutes les actions utilisateur."),
    E("retrieve_inactive_user_actions", "GET", "/api/user-action",
      params=(INACTIVE,), doc="Récupère les actions utilisateur désactivées."),
    E("update_user_action", "PUT", "/api/user-action", ("user_action_id", "request"),
      segments=("user_action_id",), body="request", doc="Met à jour une action utilisateur."),
    E("deactivate_user_action", "DELETE", "/api/user-action", ("user_action_id",),
      segments=("user_action_id",), doc="Désactive une action utilisateur."),
    E("reactivate_user_action", "PUT", "/api/user-action", ("user_action_id",),
      segments=("user_action_id",), params=(REACTIVATE,), doc="Réactive une action utilisateur."),
    E("delete_user_action", "DELETE", "/api/user-action", ("user_action_id",),
      segments=("user_action_id",), params=(HARD_DELETE,), doc="Supprime définitivement une action utilisateur."),

    # --- Raisons d'action utilisateur ---
    E("create_user_action_reason", "POST", "/api/user-action-reason", ("user_action_reason_id", "request"),
      segments=("user_action_reason_id",), body="request", doc="Crée une raison d'action (id optionnel)."),
    E("retrieve_user_action_reason", "GET", "/api/user-action-reason", ("user_action_reason_id",),
      segments=("user_action_reason_id",), doc="Récupère une raison d'action."),
    E("retrieve_user_action_reasons", "GET", "/api/user-action-reason", doc="Récupère toutes les raisons d'action."),
    E("update_user_action_reason", "PUT", "/api/user-action-reason", ("user_action_reason_id", "request"),
      segments=("user_action_reason_id",), body="request", doc="Met à jour une raison d'action."),
    E("delete_user_action_reason", "DELETE", "/api/user-action-reason", ("user_action_reason_id",),
      segments=("user_action_reason_id",), doc="Supprime une raison d'action."),

    # --- Inscriptions ---
    E("register", "POST", "/api/user/registration", ("user_id", "request"),
      segments=("user_id",), body="request",
      doc="Inscrit un utilisateur à une application (crée l'utilisateur si besoin)."),
    E("retrieve_registration", "GET", "/api/user/registration", ("user_id", "application_id"),
      segments=("user_id", "application_id"), doc="Récupère l'inscription d'un utilisateur à une application."),
    E("update_registration", "PUT", "/api/user/registration", ("user_id", "request"),
      segments=("user_id",), body="request", doc="Met à jour une inscription."),
    E("delete_registration", "DELETE", "/api/user/registration", ("user_id", "application_id"),
      segments=("user_id", "application_id"), doc="Supprime une inscription."),

    # --- Login ---
    E("login", "POST", "/api/login", ("request",), body="request", doc="Authentifie un utilisateur."),
    E("login_ping", "PUT", "/api/login", ("user_id", "application_id", "caller_ip_address"),
      segments=("user_id", "application_id"), params=(("ipAddress", "caller_ip_address"),),
      doc="Enregistre un login effectué hors de Passport (SSO, remember me...)."),
    E("logout", "POST", "/api/logout", ("global_", "refresh_token"),
      params=(("global", "global_"), ("refreshToken", "refresh_token")),
      doc="Déconnecte l'utilisateur (global=True révoque tous ses refresh tokens)."),
    E("verify_two_factor", "POST", "/api/two-factor", ("request",),
      body="request", doc="Valide un code two-factor."),

    # --- JWT ---
    E("issue_access_token", "GET", "/api/jwt/issue", ("application_id", "encoded_jwt"),
      params=(("applicationId", "application_id"),), auth="JWT {encoded_jwt}",
      doc="Émet un access token pour une autre application à partir d'un JWT valide."),
    E("validate_access_token", "GET", "/api/jwt/validate", ("encoded_jwt",),
      auth="JWT {encoded_jwt}", doc="Valide un access token (JWT)."),
    E("exchange_refresh_token_for_access_token", "POST", "/api/jwt/refresh", ("request",),
      body="request", doc="Échange un refresh token contre un nouvel access token."),
    E("retrieve_refresh_tokens", "GET", "/api/jwt/refresh", ("user_id",),
      params=(("userId", "user_id"),), doc="Récupère les refresh tokens d'un utilisateur."),
    E("retrieve_jwt_public_key", "GET", "/api/jwt/public-key", ("key_id",),
      segments=("key_id",), doc="Récupère une clé publique de signature JWT."),
    E("retrieve_jwt_public_keys", "GET", "/api/jwt/public-key", doc="Récupère toutes les clés publiques JWT."),

    # --- Rapports ---
    E("retrieve_daily_active_report", "GET", "/api/report/daily-active-user", ("application_id", "start", "end"),
      params=REPORT_PARAMS, doc="Rapport des utilisateurs actifs par jour."),
    E("retrieve_monthly_active_report", "GET", "/api/report/monthly-active-user", ("application_id", "start", "end"),
      params=REPORT_PARAMS, doc="Rapport des utilisateurs actifs par mois."),
    E("retrieve_login_report", "GET", "/api/report/login", ("application_id", "start", "end"),
      params=REPORT_PARAMS, doc="Rapport des logins."),
    E("retrieve_registration_report", "GET", "/api/report/registration", ("application_id", "start", "end"),
      params=REPORT_PARAMS, doc="Rapport des inscriptions."),
    E("retrieve_total_report", "GET", "/api/report/totals", doc="Totaux globaux et par application."),
    E("retrieve_user_login_report", "GET", "/api/report/user-login", ("user_id", "offset", "limit"),
      params=(("userId", "user_id"), ("offset", "offset"), ("limit", "limit")),
      doc="Historique des logins d'un utilisateur (paginé)."),

    # --- Configuration système ---
    E("retrieve_system_configuration", "GET", "/api/system-configuration", doc="Récupère la configuration système."),
    E("update_system_configuration", "PUT", "/api/system-configuration", ("request",),
      body="request", doc="Met à jour la configuration système."),

    # --- Webhooks ---
    E("create_webhook", "POST", "/api/webhook", ("webhook_id", "request"),
      segments=("webhook_id",), body="request", doc="Crée un webhook (id optionnel)."),
    E("retrieve_webhook", "GET", "/api/webhook", ("webhook_id",),
      segments=("webhook_id",), doc="Récupère un webhook."),
    E("retrieve_webhooks", "GET", "/api/webhook", doc="Récupère tous les webhooks."),
    E("update_webhook", "PUT", "/api/webhook", ("webhook_id", "request"),
      segments=("webhook_id",), body="request", doc="Met à jour un webhook."),
    E("delete_webhook", "DELETE", "/api/webhook", ("webhook_id",),
      segments=("webhook_id",), doc="Supprime un webhook."),
)
