"""
Internationalization (i18n) Utilities
Labels for the gestational age display (English & French)
"""
import logging

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ('en', 'fr')

# Translation dictionaries
TRANSLATIONS = {
    'en': {
        # Common
        'patient': 'Patient',
        'patient_name': 'Patient Name',
        'notes': 'Notes',
        'week': 'week',
        'weeks': 'weeks',
        'day': 'day',
        'days': 'days',
        # Pregnancy
        'last_menstrual_period': 'Last Menstrual Period (LMP)',
        'gestational_age': 'Gestational Age',
        'estimated_due_date': 'Due',
        'trimester_1': 'First Trimester',
        'trimester_2': 'Second Trimester',
        'trimester_3': 'Third Trimester',
        'overdue': 'Overdue',
        'weeks_to_go': '{weeks} weeks to go',
        'future_date': 'Future date entered',
    },
    'fr': {
        # Common
        'patient': 'Patiente',
        'patient_name': 'Nom de la Patiente',
        'notes': 'Notes',
        'week': 'semaine',
        'weeks': 'semaines',
        'day': 'jour',
        'days': 'jours',
        # Pregnancy
        'last_menstrual_period': 'Date des Dernières Règles (DDR)',
        'gestational_age': 'Âge Gestationnel',
        'estimated_due_date': 'Terme',
        'trimester_1': 'Premier Trimestre',
        'trimester_2': 'Deuxième Trimestre',
        'trimester_3': 'Troisième Trimestre',
        'overdue': 'Terme Dépassé',
        'weeks_to_go': 'Encore {weeks} semaines',
        'future_date': 'Date future saisie',
    }
}


def normalize_language(language):
    lang = language.lower() if isinstance(language, str) else 'en'
    return lang if lang in TRANSLATIONS else 'en'


def get_translation(key, language='en', default=None):
    """
    Get translation for a key in the specified language

    Args:
        key: Translation key
        language: 'en' or 'fr'
        default: Default value if key not found

    Returns:
        str: Translated text
    """
    translations = TRANSLATIONS[normalize_language(language)]
    if key not in translations:
        logger.debug("Missing translation for %s", key)
    return translations.get(key, default or key)


def describe_gestational_age(result, language='en'):
    """
    Display labels for a GestationalAgeResult

    Args:
        result: GestationalAgeResult
        language: 'en' or 'fr'

    Returns:
        dict: trimester label, status message and unit words
    """
    if result.is_future:
        status = get_translation('future_date', language)
    elif result.is_overdue:
        status = get_translation('overdue', language)
    else:
        status = get_translation('weeks_to_go', language).format(weeks=result.weeks_remaining)

    return {
        'language': normalize_language(language),
        'trimester_label': get_translation(f'trimester_{result.trimester}', language),
        'status': status,
        'weeks_unit': get_translation('week' if result.weeks == 1 else 'weeks', language),
        'days_unit': get_translation('day' if result.days == 1 else 'days', language),
    }
