import re

from .constants import RAWTEXT_ELEMENTS
from .tokens import CDataToken, CharacterTokens, CommentToken, DirectiveToken, EOFToken, Tag

_WHITESPACE = ("\t", "\n", "\f", "\r", " ")
_ATTR_VALUE_UNQUOTED_TERMINATORS = "\t\n\f\r >"
_ATTR_NAME_TERMINATORS = "\t\n\f\r />="

_ATTR_VALUE_DOUBLE_PATTERN = re.compile('"')
_ATTR_VALUE_SINGLE_PATTERN = re.compile("'")
_ATTR_VALUE_UNQUOTED_PATTERN = re.compile(f"[{re.escape(_ATTR_VALUE_UNQUOTED_TERMINATORS)}]")
_ATTR_NAME_TERMINATOR_PATTERN = re.compile(f"[{re.escape(_ATTR_NAME_TERMINATORS)}]")


class TokenizerOpts:
    __slots__ = ("recognize_cdata",)

    def __init__(self, recognize_cdata=False):
        self.recognize_cdata = bool(recognize_cdata)


class Tokenizer:
    """Forgiving markup tokenizer.

    Names are kept exactly as written, character references are left alone and
    attribute values are passed through raw, so serializing the resulting tree
    reproduces the input text wherever the tree builder did not have to repair it.
    """

    DATA = 0
    TAG_OPEN = 1
    END_TAG_OPEN = 2
    TAG_NAME = 3
    BEFORE_ATTRIBUTE_NAME = 4
    ATTRIBUTE_NAME = 5
    AFTER_ATTRIBUTE_NAME = 6
    BEFORE_ATTRIBUTE_VALUE = 7
    ATTRIBUTE_VALUE_DOUBLE = 8
    ATTRIBUTE_VALUE_SINGLE = 9
    ATTRIBUTE_VALUE_UNQUOTED = 10
    SELF_CLOSING_START_TAG = 11
    MARKUP_DECLARATION_OPEN = 12
    COMMENT = 13
    DECLARATION = 14
    PROCESSING_INSTRUCTION = 15
    BOGUS_COMMENT = 16
    RAWTEXT = 17

    __slots__ = (
        "buffer",
        "current_attr_name",
        "current_attr_value",
        "current_char",
        "current_tag_attrs",
        "current_tag_kind",
        "current_tag_name",
        "length",
        "opts",
        "pos",
        "rawtext_end_pattern",
        "reconsume",
        "sink",
        "state",
        "text_buffer",
    )

    def __init__(self, sink, opts=None):
        self.sink = sink
        self.opts = opts or TokenizerOpts()

        self.state = self.DATA
        self.buffer = ""
        self.length = 0
        self.pos = 0
        self.reconsume = False
        self.current_char = ""

        self.text_buffer = []
        self.current_tag_name = []
        self.current_tag_attrs = {}
        self.current_attr_name = []
        self.current_attr_value = []
        self.current_tag_kind = Tag.START
        self.rawtext_end_pattern = None

    def run(self, html):
        self.buffer = html or ""
        self.length = len(self.buffer)
        self.pos = 0
        self.reconsume = False
        self.current_char = ""
        self.text_buffer.clear()
        self.current_tag_name.clear()
        self.current_tag_attrs = {}
        self.current_attr_name.clear()
        self.current_attr_value.clear()
        self.current_tag_kind = Tag.START
        self.rawtext_end_pattern = None
        self.state = self.DATA

        while True:
            state = self.state
            if state == self.DATA:
                if self._state_data():
                    break
            elif state == self.TAG_OPEN:
                if self._state_tag_open():
                    break
            elif state == self.END_TAG_OPEN:
                if self._state_end_tag_open():
                    break
            elif state == self.TAG_NAME:
                if self._state_tag_name():
                    break
            elif state == self.BEFORE_ATTRIBUTE_NAME:
                if self._state_before_attribute_name():
                    break
            elif state == self.ATTRIBUTE_NAME:
                if self._state_attribute_name():
                    break
            elif state == self.AFTER_ATTRIBUTE_NAME:
                if self._state_after_attribute_name():
                    break
            elif state == self.BEFORE_ATTRIBUTE_VALUE:
                if self._state_before_attribute_value():
                    break
            elif state == self.ATTRIBUTE_VALUE_DOUBLE:
                if self._state_attribute_value_quoted(_ATTR_VALUE_DOUBLE_PATTERN, '"'):
                    break
            elif state == self.ATTRIBUTE_VALUE_SINGLE:
                if self._state_attribute_value_quoted(_ATTR_VALUE_SINGLE_PATTERN, "'"):
                    break
            elif state == self.ATTRIBUTE_VALUE_UNQUOTED:
                if self._state_attribute_value_unquoted():
                    break
            elif state == self.SELF_CLOSING_START_TAG:
                if self._state_self_closing_start_tag():
                    break
            elif state == self.MARKUP_DECLARATION_OPEN:
                if self._state_markup_declaration_open():
                    break
            elif state == self.COMMENT:
                if self._state_comment():
                    break
            elif state == self.DECLARATION:
                if self._state_declaration():
                    break
            elif state == self.PROCESSING_INSTRUCTION:
                if self._state_processing_instruction():
                    break
            elif state == self.BOGUS_COMMENT:
                if self._state_bogus_comment():
                    break
            elif state == self.RAWTEXT:
                if self._state_rawtext():
                    break
            else:
                # Unknown state fallback to data.
                self.state = self.DATA

    # ---------------------
    # State handlers
    # ---------------------

    def _state_data(self):
        if self.reconsume:
            self.reconsume = False
            c = self.current_char
            if c is None:
                return self._emit_eof()
            if c == "<":
                self.state = self.TAG_OPEN
                return False
            self.text_buffer.append(c)
        pos = self.pos
        end = self.buffer.find("<", pos)
        if end == -1:
            if pos < self.length:
                self.text_buffer.append(self.buffer[pos:])
            self.pos = self.length
            return self._emit_eof()
        if end > pos:
            self.text_buffer.append(self.buffer[pos:end])
        self.pos = end + 1
        self.state = self.TAG_OPEN
        return False

    def _state_tag_open(self):
        c = self._get_char()
        if c is None:
            self.text_buffer.append("<")
            return self._emit_eof()
        if c == "!":
            self.state = self.MARKUP_DECLARATION_OPEN
            return False
        if c == "/":
            self.state = self.END_TAG_OPEN
            return False
        if c == "?":
            self.state = self.PROCESSING_INSTRUCTION
            return False
        if c.isalpha():
            self._start_tag(Tag.START)
            self.current_tag_name.append(c)
            self.state = self.TAG_NAME
            return False

        # Not markup: the '<' is literal text.
        self.text_buffer.append("<")
        self._reconsume_current()
        self.state = self.DATA
        return False

    def _state_end_tag_open(self):
        c = self._get_char()
        if c is None:
            self.text_buffer.append("</")
            return self._emit_eof()
        if c.isalpha():
            self._start_tag(Tag.END)
            self.current_tag_name.append(c)
            self.state = self.TAG_NAME
            return False
        if c == ">":
            # "</>" is dropped
            self.state = self.DATA
            return False

        self._reconsume_current()
        self.state = self.BOGUS_COMMENT
        return False

    def _state_tag_name(self):
        while True:
            c = self._get_char()
            if c is None:
                # Unterminated tags are discarded.
                return self._emit_eof()
            if c in _WHITESPACE:
                self.state = self.BEFORE_ATTRIBUTE_NAME
                return False
            if c == "/":
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self.current_tag_name.append(c)

    def _state_before_attribute_name(self):
        while True:
            c = self._get_char()
            if c is None:
                return self._emit_eof()
            if c in _WHITESPACE:
                continue
            if c == "/":
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._start_attribute()
            self.current_attr_name.append(c)
            self.state = self.ATTRIBUTE_NAME
            return False

    def _state_attribute_name(self):
        while True:
            if self._consume_run(_ATTR_NAME_TERMINATOR_PATTERN, self.current_attr_name):
                continue
            c = self._get_char()
            if c is None:
                return self._emit_eof()
            if c in _WHITESPACE:
                self.state = self.AFTER_ATTRIBUTE_NAME
                return False
            if c == "/":
                self._finish_attribute()
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == "=":
                self.state = self.BEFORE_ATTRIBUTE_VALUE
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self.current_attr_name.append(c)

    def _state_after_attribute_name(self):
        while True:
            c = self._get_char()
            if c is None:
                return self._emit_eof()
            if c in _WHITESPACE:
                continue
            if c == "/":
                self._finish_attribute()
                self.state = self.SELF_CLOSING_START_TAG
                return False
            if c == "=":
                self.state = self.BEFORE_ATTRIBUTE_VALUE
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._finish_attribute()
            self._start_attribute()
            self.current_attr_name.append(c)
            self.state = self.ATTRIBUTE_NAME
            return False

    def _state_before_attribute_value(self):
        while True:
            c = self._get_char()
            if c is None:
                return self._emit_eof()
            if c in _WHITESPACE:
                continue
            if c == '"':
                self.state = self.ATTRIBUTE_VALUE_DOUBLE
                return False
            if c == "'":
                self.state = self.ATTRIBUTE_VALUE_SINGLE
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self._reconsume_current()
            self.state = self.ATTRIBUTE_VALUE_UNQUOTED
            return False

    def _state_attribute_value_quoted(self, stop_pattern, quote):
        while True:
            if self._consume_run(stop_pattern, self.current_attr_value):
                continue
            c = self._get_char()
            if c is None:
                # The incomplete tag is discarded.
                return self._emit_eof()
            if c == quote:
                self._finish_attribute()
                self.state = self.BEFORE_ATTRIBUTE_NAME
                return False
            self.current_attr_value.append(c)

    def _state_attribute_value_unquoted(self):
        while True:
            if self._consume_run(_ATTR_VALUE_UNQUOTED_PATTERN, self.current_attr_value):
                continue
            c = self._get_char()
            if c is None:
                return self._emit_eof()
            if c in _WHITESPACE:
                self._finish_attribute()
                self.state = self.BEFORE_ATTRIBUTE_NAME
                return False
            if c == ">":
                self._emit_current_tag()
                return False
            self.current_attr_value.append(c)

    def _state_self_closing_start_tag(self):
        c = self._get_char()
        if c is None:
            return self._emit_eof()
        if c == ">":
            # "/>" is accepted but carries no meaning.
            self._emit_current_tag()
            return False
        self._reconsume_current()
        self.state = self.BEFORE_ATTRIBUTE_NAME
        return False

    def _state_markup_declaration_open(self):
        if self._consume_if("--"):
            self.state = self.COMMENT
            return False
        if self._consume_if("[CDATA["):
            end = self.buffer.find("]]>", self.pos)
            if end == -1:
                data = self.buffer[self.pos :]
                self.pos = self.length
            else:
                data = self.buffer[self.pos : end]
                self.pos = end + 3
            if self.opts.recognize_cdata:
                self._emit_token(CDataToken(f"![CDATA[{data}]]"))
            else:
                self._emit_token(CommentToken(f"[CDATA[{data}]]"))
            self.state = self.DATA
            return False
        self.state = self.DECLARATION
        return False

    def _state_comment(self):
        end = self.buffer.find("-->", self.pos)
        if end == -1:
            # Unterminated comments keep whatever was read.
            self._emit_token(CommentToken(self.buffer[self.pos :]))
            self.pos = self.length
            return self._emit_eof()
        self._emit_token(CommentToken(self.buffer[self.pos : end]))
        self.pos = end + 3
        self.state = self.DATA
        return False

    def _state_declaration(self):
        return self._consume_until_gt(lambda data: DirectiveToken(f"!{data}"))

    def _state_processing_instruction(self):
        return self._consume_until_gt(lambda data: DirectiveToken(f"?{data}"))

    def _state_bogus_comment(self):
        return self._consume_until_gt(CommentToken)

    def _state_rawtext(self):
        match = self.rawtext_end_pattern.search(self.buffer, self.pos)
        if match is None:
            if self.pos < self.length:
                self.text_buffer.append(self.buffer[self.pos :])
            self.pos = self.length
            return self._emit_eof()
        if match.start() > self.pos:
            self.text_buffer.append(self.buffer[self.pos : match.start()])
        # Resume right after "</" so the end tag goes through the regular tag states.
        self.pos = match.start() + 2
        self.rawtext_end_pattern = None
        self.state = self.END_TAG_OPEN
        self._flush_text()
        return False

    # ---------------------
    # Helper methods
    # ---------------------

    def _get_char(self):
        if self.reconsume:
            self.reconsume = False
            return self.current_char
        if self.pos >= self.length:
            self.current_char = None
            return None
        c = self.buffer[self.pos]
        self.pos += 1
        self.current_char = c
        return c

    def _reconsume_current(self):
        self.reconsume = True

    def _consume_if(self, literal):
        end = self.pos + len(literal)
        if self.buffer[self.pos : end] != literal:
            return False
        self.pos = end
        return True

    def _consume_run(self, stop_pattern, target):
        if self.reconsume:
            return False
        pos = self.pos
        if pos >= self.length:
            return False
        match = stop_pattern.search(self.buffer, pos)
        end = match.start() if match else self.length
        if end == pos:
            return False
        target.append(self.buffer[pos:end])
        self.pos = end
        return True

    def _consume_until_gt(self, make_token):
        if self.reconsume:
            self.reconsume = False
            self.pos -= 1
        end = self.buffer.find(">", self.pos)
        if end == -1:
            self._emit_token(make_token(self.buffer[self.pos :]))
            self.pos = self.length
            return self._emit_eof()
        self._emit_token(make_token(self.buffer[self.pos : end]))
        self.pos = end + 1
        self.state = self.DATA
        return False

    def _flush_text(self):
        if not self.text_buffer:
            return
        data = "".join(self.text_buffer)
        self.text_buffer.clear()
        if data:
            self.sink.process_token(CharacterTokens(data))

    def _start_tag(self, kind):
        self.current_tag_kind = kind
        self.current_tag_name.clear()
        self.current_tag_attrs = {}
        self.current_attr_name.clear()
        self.current_attr_value.clear()

    def _start_attribute(self):
        self.current_attr_name.clear()
        self.current_attr_value.clear()

    def _finish_attribute(self):
        if not self.current_attr_name:
            self.current_attr_value.clear()
            return
        name = "".join(self.current_attr_name)
        value = "".join(self.current_attr_value)
        # First occurrence wins.
        if name not in self.current_tag_attrs:
            self.current_tag_attrs[name] = value
        self.current_attr_name.clear()
        self.current_attr_value.clear()

    def _emit_current_tag(self):
        self._finish_attribute()
        name = "".join(self.current_tag_name)
        tag = Tag(self.current_tag_kind, name, self.current_tag_attrs)
        self.current_tag_attrs = {}
        self.current_tag_name.clear()
        self.state = self.DATA
        if tag.kind == Tag.START and name.lower() in RAWTEXT_ELEMENTS:
            self.rawtext_end_pattern = re.compile(rf"</{re.escape(name)}[\t\n\f\r />]", re.IGNORECASE)
            self.state = self.RAWTEXT
        self._emit_token(tag)

    def _emit_token(self, token):
        self._flush_text()
        self.sink.process_token(token)

    def _emit_eof(self):
        self._emit_token(EOFToken())
        return True
