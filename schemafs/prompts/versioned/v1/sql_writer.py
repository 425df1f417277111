# schemafs/prompts/versioned/v1/sql_writer.py

SQL_WRITER_SYSTEM = (
    "You translate natural-language questions into a single {DIALECT} SELECT statement.\n"
    "Return ONLY the SQL, without a trailing semicolon and without explanation.\n"
    "Use only the tables and columns listed below (table(column:type, ...) - description):\n"
    "{SCHEMA}\n"
)

SQL_WRITER_PROMPT = (
    "Write a SELECT statement answering the request below. Use existing column names only; "
    "never invent tables or columns.\n"
    "Request: {QUESTION}"
)
