"""
UTF-8 decoding, character splitting, and escape handling.
"""

ESCAPES = {
	"\t": "t",
	"\n": "n",
	"\r": "r",
	"\f": "f",
	"\\": "\\",
}
UNESCAPES = {value: key for key, value in ESCAPES.items()}

WHITESPACE_CHARS = (" ", "\u3000", "\t", "\r", "\n")


#============================================
def _as_bytes(data: bytes | str) -> bytes:
	if isinstance(data, str):
		return data.encode("utf-8", "surrogateescape")
	return data


#============================================
def u8_is_lead(byte: int) -> bool:
	"""
	Check whether a byte starts a UTF-8 sequence.

	Args:
		byte: Byte value.

	Returns:
		True unless the byte is a continuation byte.
	"""
	return (byte & 0xC0) != 0x80


#============================================
def u8_len(data: bytes | str) -> int:
	"""
	Count the characters in UTF-8 data by counting lead bytes.

	Args:
		data: UTF-8 bytes, or text which is encoded first.

	Returns:
		Number of characters.
	"""
	return sum(1 for byte in _as_bytes(data) if u8_is_lead(byte))


#============================================
def u8_split_chars(data: bytes | str) -> list[bytes]:
	"""
	Split UTF-8 data into character units on lead-byte boundaries.

	Joining the result reproduces the input exactly.

	Args:
		data: UTF-8 bytes, or text which is encoded first.

	Returns:
		List of byte runs, one per character.
	"""
	units: list[bytes] = []
	current = bytearray()
	for byte in _as_bytes(data):
		if u8_is_lead(byte) and current:
			units.append(bytes(current))
			current.clear()
		current.append(byte)
	if current:
		units.append(bytes(current))
	return units


#============================================
def split_chars(text: str) -> list[str]:
	"""
	Split text into character units.

	Args:
		text: Input text.

	Returns:
		List of characters.
	"""
	return [unit.decode("utf-8", "surrogateescape") for unit in u8_split_chars(text)]


#============================================
def u8_get_skip_chars(lead: int) -> int:
	"""
	Get the UTF-8 sequence length from its lead byte.

	Args:
		lead: Lead byte value.

	Returns:
		Sequence length 1-6, or -1 if the byte is not a valid lead byte.
	"""
	if not lead & 0x80:
		return 1
	if (lead & 0xE0) == 0xC0:
		return 2
	if (lead & 0xF0) == 0xE0:
		return 3
	if (lead & 0xF8) == 0xF0:
		return 4
	if (lead & 0xFC) == 0xF8:
		return 5
	if (lead & 0xFE) == 0xFC:
		return 6
	return -1


#============================================
def u32_from_u8(data: bytes, offset: int = 0) -> tuple[int, int]:
	"""
	Decode one code point from UTF-8 data.

	Args:
		data: UTF-8 bytes.
		offset: Index of the lead byte.

	Returns:
		Tuple of (code_point, skip). skip is -1 when the sequence cannot be
		decoded, including 5 and 6 byte forms and truncated input.
	"""
	length = u8_get_skip_chars(data[offset])
	if length < 1 or length > 4 or offset + length > len(data):
		return (0, -1)
	seq = data[offset:offset + length]
	if length == 1:
		return (seq[0], 1)
	if length == 2:
		return (((seq[0] & 0x1F) << 6) | (seq[1] & 0x3F), 2)
	if length == 3:
		return (((seq[0] & 0x0F) << 12) | ((seq[1] & 0x3F) << 6) | (seq[2] & 0x3F), 3)
	code_point = (
		((seq[0] & 0x07) << 18)
		| ((seq[1] & 0x3F) << 12)
		| ((seq[2] & 0x3F) << 6)
		| (seq[3] & 0x3F)
	)
	return (code_point, 4)


#============================================
def iter_code_points(data: bytes | str):
	"""
	Yield decoded code points, or None once the data turns out malformed.

	Args:
		data: UTF-8 bytes, or text which is encoded first.

	Yields:
		Code points; a single None ends the sequence on a bad lead byte.
	"""
	raw = _as_bytes(data)
	offset = 0
	while offset < len(raw):
		code_point, skip = u32_from_u8(raw, offset)
		if skip == -1:
			yield None
			return
		yield code_point
		offset += skip


#============================================
def mstr_escape(text: str) -> str:
	"""
	Escape control characters and backslashes.

	Args:
		text: Input text.

	Returns:
		Escaped text.
	"""
	result: list[str] = []
	for char in text:
		if char in ESCAPES:
			result.append("\\" + ESCAPES[char])
		else:
			result.append(char)
	return "".join(result)


#============================================
def mstr_unescape(text: str) -> str:
	"""
	Undo backslash escapes for tab, newline, return, form feed and backslash.

	Unknown escapes keep the escaped character. A trailing lone backslash is
	kept as is.

	Args:
		text: Escaped text.

	Returns:
		Unescaped text.
	"""
	result: list[str] = []
	escaping = False
	for index, char in enumerate(text):
		if escaping:
			result.append(UNESCAPES.get(char, char))
			escaping = False
			continue
		if char != "\\":
			result.append(char)
			continue
		if index + 1 == len(text):
			result.append(char)
			break
		escaping = True
	return "".join(result)


#============================================
def split_by_newlines(text: str) -> list[str]:
	"""
	Split text into rows after normalizing CRLF and CR to LF.

	Args:
		text: Input text.

	Returns:
		Rows without line break characters.
	"""
	normalized = text.replace("\r\n", "\n").replace("\r", "\n")
	return normalized.split("\n")


#============================================
def strip_whitespace(text: str) -> str:
	"""
	Remove spaces, ideographic spaces, tabs and line breaks.

	Args:
		text: Input text.

	Returns:
		Text without whitespace.
	"""
	for char in WHITESPACE_CHARS:
		text = text.replace(char, "")
	return text


#============================================
def replace_undecodable(text: str) -> str:
	"""
	Replace bytes that were not valid UTF-8 with U+FFFD.

	Command line arguments carry such bytes as surrogate escapes.

	Args:
		text: Input text.

	Returns:
		Text that encodes to UTF-8 cleanly.
	"""
	return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")
