"""SQL query builders for Attachment State."""


def build_insert_interaction() -> str:
    """Build insert for a single interaction record."""
    return """
    INSERT INTO interactions
        (entity_id, dialogue_text, user_response, timestamp, attachment_level)
    VALUES
        (:entity_id, :dialogue_text, :user_response, :timestamp, :attachment_level)
    """


def build_entity_history_query() -> str:
    """Build query for one entity's interactions in insertion order."""
    return """
    SELECT entity_id, dialogue_text, user_response, timestamp, attachment_level
    FROM interactions
    WHERE entity_id = :entity_id
    ORDER BY id
    """


def build_entity_count_query() -> str:
    """Build query counting one entity's interactions."""
    return """
    SELECT COUNT(*) AS n
    FROM interactions
    WHERE entity_id = :entity_id
    """


def build_entity_ids_query() -> str:
    """Build query for entity ids in order of first interaction."""
    return """
    SELECT entity_id
    FROM interactions
    GROUP BY entity_id
    ORDER BY MIN(id)
    """


def build_clear_interactions() -> str:
    """Build statement removing every interaction record."""
    return "DELETE FROM interactions"
