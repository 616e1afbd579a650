"""
Built-in sample language set (en, es, fr) for trying the tool without files.
"""

import copy

from i18n_manager.core.document import LanguageSet, TranslationFile

_SAMPLE_CONTENT = {
    'en': {
        'common': {
            'welcome': "Welcome to i18n Manager",
            'greeting': "Hello, {{name}}!",
            'buttons': {
                'save': "Save",
                'cancel': "Cancel",
                'submit': "Submit"
            }
        },
        'pages': {
            'home': {
                'title': "Home Page",
                'description': "This is the home page"
            },
            'about': {
                'title': "About Us",
                'description': "Learn more about our company"
            }
        }
    },
    'es': {
        'common': {
            'welcome': "Bienvenido a i18n Manager",
            'greeting': "¡Hola, {{name}}!",
            'buttons': {
                'save': "Guardar",
                'cancel': "Cancelar",
                'submit': "Enviar"
            }
        },
        'pages': {
            'home': {
                'title': "Página de inicio",
                'description': "Esta es la página de inicio"
            },
            'about': {
                'title': "Sobre Nosotros",
                'description': "Aprende más sobre nuestra empresa"
            }
        }
    },
    'fr': {
        'common': {
            'welcome': "Bienvenue sur i18n Manager",
            'greeting': "Bonjour, {{name}} !",
            'buttons': {
                'save': "Enregistrer",
                'cancel': "Annuler",
                'submit': "Soumettre"
            }
        },
        'pages': {
            'home': {
                'title': "Page d'accueil",
                'description': "C'est la page d'accueil"
            },
            'about': {
                'title': "À propos de nous",
                'description': "En savoir plus sur notre entreprise"
            }
        }
    },
}


def get_sample_translations() -> LanguageSet:
    """Fresh copy of the sample set; callers may modify it freely."""
    return {
        lang: TranslationFile(file_path=f"{lang}.json", content=copy.deepcopy(content))
        for lang, content in _SAMPLE_CONTENT.items()
    }
