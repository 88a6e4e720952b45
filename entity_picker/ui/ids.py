from __future__ import annotations

__all__ = ["IDs"]


class IDs:
    class Store:
        SELECTION = "selection-state"
        TABLE_STATE = "table-state"
        COMMIT_RESULT = "commit-result"

    class Control:
        # Page
        OPEN_PICKER_BTN = "open-picker-btn"
        RESULT_LIST = "result-list"

        # Picker modal
        PICKER_MODAL = "picker-modal"
        PICKER_DESCRIPTION = "picker-description"
        ENTITY_TABLE = "entity-table"
        LISTING_STATUS = "listing-status"
        SELECT_ALL = "select-all-checkbox"
        SELECTED_TOTAL = "selected-total"
        PICKER_ALERT = "picker-alert"
        CONTINUE_BTN = "picker-continue-btn"
        CANCEL_BTN = "picker-cancel-btn"
