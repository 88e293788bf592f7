from flask import current_app, g

MESSAGES = {
    "en": {
        "nav.home": "Home",
        "nav.services": "Services",
        "nav.case_studies": "Case studies",
        "nav.blog": "Blog",
        "nav.language": "Language",
        "home.title": "Welcome",
        "home.intro": "Explore what we do.",
        "services.title": "Our services",
        "services.empty": "No services published yet.",
        "case_studies.title": "Case studies",
        "case_studies.technology": "Technologies",
        "case_studies.empty": "No case studies published yet.",
        "blog.title": "Blog",
        "blog.empty": "No posts yet.",
        "blog.read_more": "Read more",
        "blog.published": "Published",
        "common.learn_more": "Learn more",
        "contact.name": "Name",
        "contact.email": "E-mail",
        "contact.message": "Message",
        "contact.submit": "Send message",
        "errors.not_found": "Page not found",
        "errors.not_found_body": "The page you are looking for does not exist.",
        "errors.server": "Something went wrong",
        "errors.server_body": "Please try again later.",
        "footer.rights": "All rights reserved.",
    },
    "de": {
        "nav.home": "Startseite",
        "nav.services": "Leistungen",
        "nav.case_studies": "Fallstudien",
        "nav.blog": "Blog",
        "nav.language": "Sprache",
        "home.title": "Willkommen",
        "home.intro": "Entdecken Sie, was wir tun.",
        "services.title": "Unsere Leistungen",
        "services.empty": "Noch keine Leistungen veröffentlicht.",
        "case_studies.title": "Fallstudien",
        "case_studies.technology": "Technologien",
        "case_studies.empty": "Noch keine Fallstudien veröffentlicht.",
        "blog.title": "Blog",
        "blog.empty": "Noch keine Beiträge.",
        "blog.read_more": "Weiterlesen",
        "blog.published": "Veröffentlicht",
        "common.learn_more": "Mehr erfahren",
        "contact.name": "Name",
        "contact.email": "E-Mail",
        "contact.message": "Nachricht",
        "contact.submit": "Nachricht senden",
        "errors.not_found": "Seite nicht gefunden",
        "errors.not_found_body": "Die gesuchte Seite existiert nicht.",
        "errors.server": "Etwas ist schiefgelaufen",
        "errors.server_body": "Bitte versuchen Sie es später erneut.",
        "footer.rights": "Alle Rechte vorbehalten.",
    },
    "fr": {
        "nav.home": "Accueil",
        "nav.services": "Services",
        "nav.case_studies": "Études de cas",
        "nav.blog": "Blog",
        "nav.language": "Langue",
        "home.title": "Bienvenue",
        "home.intro": "Découvrez ce que nous faisons.",
        "services.title": "Nos services",
        "services.empty": "Aucun service publié pour le moment.",
        "case_studies.title": "Études de cas",
        "case_studies.technology": "Technologies",
        "case_studies.empty": "Aucune étude de cas publiée pour le moment.",
        "blog.title": "Blog",
        "blog.empty": "Aucun article pour le moment.",
        "blog.read_more": "Lire la suite",
        "blog.published": "Publié",
        "common.learn_more": "En savoir plus",
        "contact.name": "Nom",
        "contact.email": "E-mail",
        "contact.message": "Message",
        "contact.submit": "Envoyer le message",
        "errors.not_found": "Page introuvable",
        "errors.not_found_body": "La page que vous cherchez n'existe pas.",
        "errors.server": "Une erreur est survenue",
        "errors.server_body": "Veuillez réessayer plus tard.",
        "footer.rights": "Tous droits réservés.",
    },
}

LOCALE_NAMES = {"en": "English", "de": "Deutsch", "fr": "Français"}


def current_locale():
    return getattr(g, "locale", None) or current_app.config["DEFAULT_LOCALE"]


def translate(key, locale=None):
    """Look up a UI string, falling back to the default locale, then the key."""
    locale = locale or current_locale()
    messages = MESSAGES.get(locale) or {}
    if key in messages:
        return messages[key]
    return MESSAGES.get(current_app.config["DEFAULT_LOCALE"], {}).get(key, key)
