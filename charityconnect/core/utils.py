import re


def mask_email(email: str) -> str:
    """Mask the local part of an email: 'john@x.com' -> 'j**n@x.com'."""
    username, sep, domain = email.partition('@')
    if len(username) > 2:
        username = username[0] + '*' * (len(username) - 2) + username[-1]
    return f"{username}{sep}{domain}"


def mask_phone(phone: str) -> str:
    """Keep the first and last two characters of a phone number."""
    if len(phone) < 4:
        return phone
    return phone[:2] + '*' * (len(phone) - 4) + phone[-2:]


def mask_database_url(url: str) -> str:
    """Hide the password in a connection URL for logging."""
    return re.sub(r':[^:@/]*@', ':****@', url)
