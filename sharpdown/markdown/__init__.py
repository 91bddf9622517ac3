from .htmltokens import HtmlToken, TokenType, tokenizeHtml
from .markdown import Markdown, transform, version
from .normalize import normalize
from .session import LinkDefinition, TransformSession, foldLinkId
