"""Prompt catalog: every piece of text the agent shows, per language.

Components receive a ``PromptCatalog`` and look text up by ``PromptKey``;
they never embed literal prompt strings.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping


class PromptKey(str, Enum):
    """The fixed set of prompt keys."""

    INVALID = "invalid_literal"
    SHOULD_BE_ONE_OF = "should_be_one_of_below_literal"
    MESSAGE_START = "horizontal_start"
    MESSAGE_END = "horizontal_end"
    EMAIL_ADDR_INVALID = "email_addr_invalid"
    WELCOME = "eua_welcome"
    LOGGING_OUT = "eua_logging_out"
    LOGOUT_SUCCEED = "eua_logout_succeed"
    LOGOUT_FAIL = "eua_logout_fail"
    EXIT = "eua_exit"
    INPUT_CLOSED = "eua_input_closed"
    LOGIN = "login"
    LOGIN_EMAIL_ADDR = "login_email_addr"
    LOGIN_PASSWORD = "login_password"
    LOGIN_CONNECTING = "login_connecting"
    LOGIN_CONNECT_SUCCEED = "login_connect_succeed"
    LOGIN_CONNECT_FAIL = "login_connect_fail"
    LOGIN_SUCCEED = "login_succeed"
    LOGIN_RETRY = "login_retry"
    LOGIN_ABORTED = "login_aborted"
    ACTION_LITERAL = "action_literal"
    ACTION_LIST = "action_list"
    ACTION_SELECTION = "action_selection"
    COMPOSE_NEW_MESSAGE = "compose_new_message"
    COMPOSE_TO = "compose_to"
    COMPOSE_SUBJECT = "compose_subject"
    COMPOSE_CONTENT = "compose_content"
    COMPOSE_EDITING_FINISH = "compose_editing_finish"
    SEND_CONFIRM_LITERAL = "send_confirm_literal"
    SEND_RECONFIRM_LIST = "send_reconfirm_list"
    SEND_RECONFIRM_SELECTION = "send_reconfirm_selection"
    SEND_SENDING = "send_sending"
    SEND_SUCCEED = "send_succeed"
    SEND_CANCEL = "send_cancel"
    SEND_FAIL = "send_fail"
    FETCH_MAILBOX_LITERAL = "fetch_mailbox_literal"
    FETCH_MAILBOX = "fetch_mailbox"
    FETCH_MAILBOX_SELECTION = "fetch_mailbox_selection"
    FETCH_MAILBOX_EMPTY = "fetch_mailbox_empty"
    FETCH_MAILBOX_NONE = "fetch_mailbox_none"
    FETCH_MESSAGE_LITERAL = "fetch_message_literal"
    FETCH_MESSAGE_LIST = "fetch_message_list"
    FETCH_MESSAGE_SELECTION = "fetch_message_selection"
    FETCH_MESSAGE_FAIL = "fetch_message_fail"


class PromptCatalog:
    """Read-only lookup of prompt text for one language."""

    def __init__(self, language: str, entries: Mapping[PromptKey, str]):
        missing = [key.name for key in PromptKey if key not in entries]
        if missing:
            raise ValueError(
                f"Prompt catalog '{language}' is missing keys: {', '.join(missing)}"
            )

        self.language = language
        self._entries = MappingProxyType(dict(entries))

    def __getitem__(self, key: PromptKey) -> str:
        return self._entries[key]

    def __repr__(self) -> str:
        return f"PromptCatalog(language={self.language!r})"


_ENGLISH: Dict[PromptKey, str] = {
    PromptKey.INVALID: "! Invalid ",
    PromptKey.SHOULD_BE_ONE_OF: "should be one of below",
    PromptKey.MESSAGE_START: "  ----------------message starts----------------",
    PromptKey.MESSAGE_END: "  -----------------message ends-----------------",
    PromptKey.EMAIL_ADDR_INVALID: "! Invalid email: please check and try again.",
    PromptKey.WELCOME: "> Archivist - your mail user agent.",
    PromptKey.LOGGING_OUT: "> Logging out from ",
    PromptKey.LOGOUT_SUCCEED: "✓ Logged out.",
    PromptKey.LOGOUT_FAIL: "! Failed to logout: ",
    PromptKey.EXIT: "> Press `Enter` to exit...",
    PromptKey.INPUT_CLOSED: "! Input closed, quitting.",
    PromptKey.LOGIN: "> Login is required before interacting with the SMTP/IMAP server.",
    PromptKey.LOGIN_EMAIL_ADDR: "  Email address: ",
    PromptKey.LOGIN_PASSWORD: "  SMTP/IMAP password (not email password): ",
    PromptKey.LOGIN_CONNECTING: "> Connecting to ",
    PromptKey.LOGIN_CONNECT_SUCCEED: "✓ Connected to ",
    PromptKey.LOGIN_CONNECT_FAIL: "! Failed to connect ",
    PromptKey.LOGIN_SUCCEED: "> Welcome back, ",
    PromptKey.LOGIN_RETRY: "> Retry login.",
    PromptKey.LOGIN_ABORTED: "! Giving up after too many failed login attempts.",
    PromptKey.ACTION_LITERAL: "action",
    PromptKey.ACTION_LIST: (
        "> Actions:\n"
        "  [0] Logout & quit\n"
        "  [1] Compose\n"
        "  [2] Fetch message"
    ),
    PromptKey.ACTION_SELECTION: "  Select an action: ",
    PromptKey.COMPOSE_NEW_MESSAGE: "> New message:",
    PromptKey.COMPOSE_TO: "  To: ",
    PromptKey.COMPOSE_SUBJECT: "  Subject: ",
    PromptKey.COMPOSE_CONTENT: "  Content (enter 2 empty lines in a row to finish editing):",
    PromptKey.COMPOSE_EDITING_FINISH: "> You have finished editing.",
    PromptKey.SEND_CONFIRM_LITERAL: "confirmation",
    PromptKey.SEND_RECONFIRM_LIST: (
        "> Reconfirmation:\n"
        "  [yes] confirm sending\n"
        "  [no]  cancel"
    ),
    PromptKey.SEND_RECONFIRM_SELECTION: "  Confirm: ",
    PromptKey.SEND_SENDING: "> Sending...",
    PromptKey.SEND_SUCCEED: "✓ Your email has been sent to ",
    PromptKey.SEND_CANCEL: "> Sending canceled.",
    PromptKey.SEND_FAIL: "! Failed to send message: ",
    PromptKey.FETCH_MAILBOX_LITERAL: "mailbox",
    PromptKey.FETCH_MAILBOX: "> Mailboxes to choose from:",
    PromptKey.FETCH_MAILBOX_SELECTION: "  Select a mailbox: ",
    PromptKey.FETCH_MAILBOX_EMPTY: " has no messages.",
    PromptKey.FETCH_MAILBOX_NONE: "> There are no mailboxes to choose from.",
    PromptKey.FETCH_MESSAGE_LITERAL: "message",
    PromptKey.FETCH_MESSAGE_LIST: "✓ Fetched messages:",
    PromptKey.FETCH_MESSAGE_SELECTION: "  Select a message: ",
    PromptKey.FETCH_MESSAGE_FAIL: "! Failed to read message: ",
}

_CHINESE: Dict[PromptKey, str] = {
    PromptKey.INVALID: "! 无效",
    PromptKey.SHOULD_BE_ONE_OF: "应为下列值之一",
    PromptKey.MESSAGE_START: "  ----------------邮件开始----------------",
    PromptKey.MESSAGE_END: "  ----------------邮件结束----------------",
    PromptKey.EMAIL_ADDR_INVALID: "! 无效邮箱地址: 请检查并重新输入.",
    PromptKey.WELCOME: "> Archivist - 你的邮件用户代理.",
    PromptKey.LOGGING_OUT: "> 正在登出 ",
    PromptKey.LOGOUT_SUCCEED: "✓ 已登出.",
    PromptKey.LOGOUT_FAIL: "! 登出失败: ",
    PromptKey.EXIT: "> 按下 `Enter` 键退出...",
    PromptKey.INPUT_CLOSED: "! 输入已关闭, 正在退出.",
    PromptKey.LOGIN: "> 在与 SMTP/IMAP 服务器交互之前, 必须登录.",
    PromptKey.LOGIN_EMAIL_ADDR: "  邮箱地址: ",
    PromptKey.LOGIN_PASSWORD: "  SMTP/IMAP 授权码 (不是邮箱密码): ",
    PromptKey.LOGIN_CONNECTING: "> 正在连接 ",
    PromptKey.LOGIN_CONNECT_SUCCEED: "✓ 已连接到 ",
    PromptKey.LOGIN_CONNECT_FAIL: "! 无法连接 ",
    PromptKey.LOGIN_SUCCEED: "> 欢迎回来, ",
    PromptKey.LOGIN_RETRY: "> 重新尝试登录.",
    PromptKey.LOGIN_ABORTED: "! 登录失败次数过多, 已放弃.",
    PromptKey.ACTION_LITERAL: "操作",
    PromptKey.ACTION_LIST: (
        "> 操作:\n"
        "  [0] 登出 & 关闭\n"
        "  [1] 写信\n"
        "  [2] 收信"
    ),
    PromptKey.ACTION_SELECTION: "  选择操作: ",
    PromptKey.COMPOSE_NEW_MESSAGE: "> 新邮件:",
    PromptKey.COMPOSE_TO: "  收件人: ",
    PromptKey.COMPOSE_SUBJECT: "  主题: ",
    PromptKey.COMPOSE_CONTENT: "  正文 (连续输入 2 个空行以完成编辑):",
    PromptKey.COMPOSE_EDITING_FINISH: "> 你已完成编辑.",
    PromptKey.SEND_CONFIRM_LITERAL: "确认",
    PromptKey.SEND_RECONFIRM_LIST: (
        "> 再次确认:\n"
        "  [yes] 确认发送\n"
        "  [no]  取消发送"
    ),
    PromptKey.SEND_RECONFIRM_SELECTION: "  确认: ",
    PromptKey.SEND_SENDING: "> 正在发送...",
    PromptKey.SEND_SUCCEED: "✓ 你的邮件已发至 ",
    PromptKey.SEND_CANCEL: "> 发送已取消.",
    PromptKey.SEND_FAIL: "! 发送失败: ",
    PromptKey.FETCH_MAILBOX_LITERAL: "收件箱",
    PromptKey.FETCH_MAILBOX: "> 可选的收件箱:",
    PromptKey.FETCH_MAILBOX_SELECTION: "  选择收件箱: ",
    PromptKey.FETCH_MAILBOX_EMPTY: " 里没有邮件.",
    PromptKey.FETCH_MAILBOX_NONE: "> 没有可选的收件箱.",
    PromptKey.FETCH_MESSAGE_LITERAL: "邮件",
    PromptKey.FETCH_MESSAGE_LIST: "✓ 收到邮件:",
    PromptKey.FETCH_MESSAGE_SELECTION: "  选择邮件: ",
    PromptKey.FETCH_MESSAGE_FAIL: "! 读取失败: ",
}

CATALOGS: Dict[str, PromptCatalog] = {
    "en": PromptCatalog("en", _ENGLISH),
    "zh": PromptCatalog("zh", _CHINESE),
}


def get_catalog(language: str) -> PromptCatalog:
    """Return the catalog for ``language`` (``en`` or ``zh``)."""
    try:
        return CATALOGS[language.lower()]
    except KeyError:
        raise ValueError(
            f"Unsupported language '{language}', expected one of: {', '.join(CATALOGS)}"
        ) from None
