"""Infrastructure modules for the localization kit.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- events: In-process event dispatcher
- i18n: Localized templates and application language selection
- services: Process-wide providers (get_settings, get_localization_service)
"""
