"""Identity SQL query constants.

All statements are parameterized ($1..$n); only the validated schema name is
formatted in with str.format(schema=...).
"""

# =====================================================================================
# USERS QUERIES
# =====================================================================================

USER_SELECT_COLUMNS = """
    u.id, u.user_name, u.normalized_user_name, u.email, u.normalized_email,
    u.email_confirmed, u.password_hash, u.security_stamp, u.concurrency_stamp,
    u.phone_number, u.phone_number_confirmed, u.two_factor_enabled,
    u.lockout_end, u.lockout_enabled, u.access_failed_count
"""

USER_INSERT = """
    INSERT INTO {schema}.identity_users (
        id, user_name, normalized_user_name, email, normalized_email,
        email_confirmed, password_hash, security_stamp, concurrency_stamp,
        phone_number, phone_number_confirmed, two_factor_enabled,
        lockout_end, lockout_enabled, access_failed_count
    ) VALUES (
        $1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15
    )
"""

# $16 is the concurrency stamp the caller last read
USER_UPDATE = """
    UPDATE {schema}.identity_users SET
        user_name = $2,
        normalized_user_name = $3,
        email = $4,
        normalized_email = $5,
        email_confirmed = $6,
        password_hash = $7,
        security_stamp = $8,
        concurrency_stamp = $9,
        phone_number = $10,
        phone_number_confirmed = $11,
        two_factor_enabled = $12,
        lockout_end = $13,
        lockout_enabled = $14,
        access_failed_count = $15
    WHERE id = $1 AND concurrency_stamp IS NOT DISTINCT FROM $16
"""

USER_DELETE = """
    DELETE FROM {schema}.identity_users
    WHERE id = $1
"""

USER_GET_BY_ID = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    WHERE u.id = $1
"""

USER_GET_BY_NORMALIZED_NAME = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    WHERE u.normalized_user_name = $1
"""

USER_GET_BY_NORMALIZED_EMAIL = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    WHERE u.normalized_email = $1
"""

USER_LIST_ALL = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    ORDER BY u.normalized_user_name, u.id
"""

USER_LIST_FOR_CLAIM = """
    SELECT DISTINCT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    INNER JOIN {schema}.identity_user_claims AS uc ON uc.user_id = u.id
    WHERE uc.claim_type = $1 AND uc.claim_value = $2
"""

USER_LIST_IN_ROLE = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    INNER JOIN {schema}.identity_user_roles AS ur ON ur.user_id = u.id
    INNER JOIN {schema}.identity_roles AS r ON r.id = ur.role_id
    WHERE r.normalized_name = $1
"""

USER_GET_BY_LOGIN = """
    SELECT """ + USER_SELECT_COLUMNS + """
    FROM {schema}.identity_users AS u
    INNER JOIN {schema}.identity_user_logins AS ul ON ul.user_id = u.id
    WHERE ul.login_provider = $1 AND ul.provider_key = $2
"""

# =====================================================================================
# ROLES QUERIES
# =====================================================================================

ROLE_INSERT = """
    INSERT INTO {schema}.identity_roles (id, name, normalized_name, concurrency_stamp)
    VALUES ($1, $2, $3, $4)
"""

ROLE_UPDATE = """
    UPDATE {schema}.identity_roles SET
        name = $2,
        normalized_name = $3,
        concurrency_stamp = $4
    WHERE id = $1 AND concurrency_stamp IS NOT DISTINCT FROM $5
"""

ROLE_DELETE = """
    DELETE FROM {schema}.identity_roles
    WHERE id = $1
"""

ROLE_GET_BY_ID = """
    SELECT id, name, normalized_name, concurrency_stamp
    FROM {schema}.identity_roles
    WHERE id = $1
"""

ROLE_GET_BY_NORMALIZED_NAME = """
    SELECT id, name, normalized_name, concurrency_stamp
    FROM {schema}.identity_roles
    WHERE normalized_name = $1
"""

ROLE_LIST_ALL = """
    SELECT id, name, normalized_name, concurrency_stamp
    FROM {schema}.identity_roles
    ORDER BY normalized_name, id
"""

# =====================================================================================
# USER CLAIMS QUERIES
# =====================================================================================

USER_CLAIMS_GET_BY_USER = """
    SELECT id, user_id, claim_type, claim_value
    FROM {schema}.identity_user_claims
    WHERE user_id = $1
    ORDER BY id
"""

USER_CLAIMS_DELETE_BY_USER = """
    DELETE FROM {schema}.identity_user_claims
    WHERE user_id = $1
"""

USER_CLAIMS_INSERT = """
    INSERT INTO {schema}.identity_user_claims (id, user_id, claim_type, claim_value)
    VALUES ($1, $2, $3, $4)
"""

# =====================================================================================
# ROLE CLAIMS QUERIES
# =====================================================================================

ROLE_CLAIMS_GET_BY_ROLE = """
    SELECT id, role_id, claim_type, claim_value
    FROM {schema}.identity_role_claims
    WHERE role_id = $1
    ORDER BY id
"""

ROLE_CLAIMS_DELETE_BY_ROLE = """
    DELETE FROM {schema}.identity_role_claims
    WHERE role_id = $1
"""

ROLE_CLAIMS_INSERT = """
    INSERT INTO {schema}.identity_role_claims (id, role_id, claim_type, claim_value)
    VALUES ($1, $2, $3, $4)
"""

# =====================================================================================
# USER LOGINS QUERIES
# =====================================================================================

USER_LOGINS_GET_BY_USER = """
    SELECT user_id, login_provider, provider_key, provider_display_name
    FROM {schema}.identity_user_logins
    WHERE user_id = $1
"""

USER_LOGINS_DELETE_BY_USER = """
    DELETE FROM {schema}.identity_user_logins
    WHERE user_id = $1
"""

USER_LOGINS_INSERT = """
    INSERT INTO {schema}.identity_user_logins (login_provider, provider_key, provider_display_name, user_id)
    VALUES ($1, $2, $3, $4)
"""

# =====================================================================================
# USER ROLES QUERIES
# =====================================================================================

USER_ROLES_GET_BY_USER = """
    SELECT r.id AS role_id, r.name AS role_name, r.normalized_name AS normalized_role_name
    FROM {schema}.identity_roles AS r
    INNER JOIN {schema}.identity_user_roles AS ur ON ur.role_id = r.id
    WHERE ur.user_id = $1
"""

USER_ROLES_DELETE_BY_USER = """
    DELETE FROM {schema}.identity_user_roles
    WHERE user_id = $1
"""

USER_ROLES_INSERT = """
    INSERT INTO {schema}.identity_user_roles (user_id, role_id)
    VALUES ($1, $2)
"""

USER_ROLES_DELETE_BY_ROLE = """
    DELETE FROM {schema}.identity_user_roles
    WHERE role_id = $1
"""

# =====================================================================================
# USER TOKENS QUERIES
# =====================================================================================

USER_TOKENS_GET_BY_USER = """
    SELECT user_id, login_provider, name, value
    FROM {schema}.identity_user_tokens
    WHERE user_id = $1
"""

USER_TOKENS_GET_ONE = """
    SELECT user_id, login_provider, name, value
    FROM {schema}.identity_user_tokens
    WHERE user_id = $1 AND login_provider = $2 AND name = $3
"""

USER_TOKENS_DELETE_BY_USER = """
    DELETE FROM {schema}.identity_user_tokens
    WHERE user_id = $1
"""

USER_TOKENS_INSERT = """
    INSERT INTO {schema}.identity_user_tokens (user_id, login_provider, name, value)
    VALUES ($1, $2, $3, $4)
"""
