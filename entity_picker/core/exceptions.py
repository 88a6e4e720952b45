class EntityPickerError(Exception):
    """Base exception for all entity_picker errors"""
    pass

class ConfigError(EntityPickerError):
    """Invalid or inconsistent global.json or entity listing file"""
    pass

class ListingQueryError(EntityPickerError):
    """
    Filter or sort request the listing provider cannot interpret
    unknown column, malformed filter_query fragment, etc
    """
    pass

class WorkflowClosedError(EntityPickerError):
    """Selection workflow was used after it was committed or cancelled"""
    pass
