"""
Cypher statements for the Answer repository.

Each statement is a single round trip. Parameters are always passed by
name; nothing caller-supplied is interpolated into the text.
"""

from src.answers.models import AnswerRecord, DeleteRecord, FollowRecord, KeyRecord
from src.shared.database import CypherQuery

LABEL = "Answer"
KEY = "answername"

GET_ANSWER = CypherQuery(
    name="get_answer",
    text="""
    MATCH (answer:Answer {answername: $answername})
    RETURN answer, elementId(answer) AS element_id
    """,
    decode=AnswerRecord.from_row,
)

GET_ALL_ANSWERS = CypherQuery(
    name="get_all_answers",
    text="""
    MATCH (answer:Answer)
    RETURN answer, elementId(answer) AS element_id
    """,
    decode=AnswerRecord.from_row,
)

CREATE_ANSWER = CypherQuery(
    name="create_answer",
    text="""
    CREATE (answer:Answer $props)
    RETURN answer, elementId(answer) AS element_id
    """,
    decode=AnswerRecord.from_row,
)

PATCH_ANSWER = CypherQuery(
    name="patch_answer",
    text="""
    MATCH (answer:Answer {answername: $answername})
    SET answer += $props
    RETURN answer, elementId(answer) AS element_id
    """,
    decode=AnswerRecord.from_row,
)

# Plain DELETE (not DETACH) still fails if relationships of any other
# type are attached; only follows edges are expected. Always returns one
# row: deleted is 0 when the answer was already gone.
DELETE_ANSWER = CypherQuery(
    name="delete_answer",
    text="""
    MATCH (answer:Answer {answername: $answername})
    OPTIONAL MATCH (answer)-[rel:follows]-()
    WITH answer, collect(rel) AS rels
    FOREACH (r IN rels | DELETE r)
    DELETE answer
    RETURN count(*) AS deleted
    """,
    decode=DeleteRecord.from_row,
)

FOLLOW = CypherQuery(
    name="follow",
    text="""
    MATCH (answer:Answer {answername: $answername})
    MATCH (other:Answer {answername: $other})
    MERGE (answer)-[:follows]->(other)
    RETURN answer.answername AS answername
    """,
    decode=KeyRecord.from_row,
)

# Deleting a null rel is a no-op, so a row comes back whenever both
# endpoints exist, edge or not.
UNFOLLOW = CypherQuery(
    name="unfollow",
    text="""
    MATCH (answer:Answer {answername: $answername})
    MATCH (other:Answer {answername: $other})
    OPTIONAL MATCH (answer)-[rel:follows]->(other)
    DELETE rel
    RETURN answer.answername AS answername
    """,
    decode=KeyRecord.from_row,
)

# One row per other answer; a single row with a null ``other`` when the
# subject is alone; no rows when the subject does not exist.
FOLLOWING_AND_OTHERS = CypherQuery(
    name="following_and_others",
    text="""
    MATCH (answer:Answer {answername: $answername})
    OPTIONAL MATCH (other:Answer)
    WHERE other <> answer
    OPTIONAL MATCH (answer)-[rel:follows]->(other)
    RETURN other, elementId(other) AS element_id, count(rel) > 0 AS follows
    """,
    decode=FollowRecord.from_row,
)
