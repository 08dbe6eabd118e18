"""
Hypothesis strategies for registry and share-workflow properties.
"""

from hypothesis import strategies as st

from codedrop.domain.file_storage.value_objects import CODE_ALPHABET, CODE_LENGTH

share_codes = st.text(alphabet=CODE_ALPHABET, min_size=CODE_LENGTH, max_size=CODE_LENGTH)

quotas = st.one_of(st.none(), st.integers(min_value=1, max_value=10))

passwords = st.one_of(
    st.none(),
    st.text(min_size=1, max_size=20),
)

filenames = st.from_regex(r"[A-Za-z0-9_\-]{1,20}(\.[a-z0-9]{1,5})?", fullmatch=True)

payloads = st.binary(min_size=0, max_size=512)

# Request sequences against a single protected share
operations = st.lists(
    st.sampled_from(["download", "info", "wrong_password"]),
    min_size=1,
    max_size=15,
)
