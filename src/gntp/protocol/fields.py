"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

PROTOCOL = "GNTP"
VERSION = "1.0"
ENCRYPTION = "NONE"

# Character set for all header text
CHARSET = "utf-8"

# Request message types
REGISTER = "REGISTER"
NOTIFY = "NOTIFY"

# Response status values
OK = "OK"
ERROR = "ERROR"
CALLBACK = "CALLBACK"

# Origin headers, sent with every request
ORIGIN_MACHINE_NAME = "Origin-Machine-Name"
ORIGIN_SOFTWARE_NAME = "Origin-Software-Name"
ORIGIN_SOFTWARE_VERSION = "Origin-Software-Version"
ORIGIN_PLATFORM_NAME = "Origin-Platform-Name"
ORIGIN_PLATFORM_VERSION = "Origin-Platform-Version"

APPLICATION_NAME = "Application-Name"
APPLICATION_ICON = "Application-Icon"
NOTIFICATIONS_COUNT = "Notifications-Count"

NOTIFICATION_NAME = "Notification-Name"
NOTIFICATION_DISPLAY_NAME = "Notification-Display-Name"
NOTIFICATION_ENABLED = "Notification-Enabled"
NOTIFICATION_ICON = "Notification-Icon"
NOTIFICATION_ID = "Notification-ID"
NOTIFICATION_TITLE = "Notification-Title"
NOTIFICATION_TEXT = "Notification-Text"
NOTIFICATION_STICKY = "Notification-Sticky"
NOTIFICATION_PRIORITY = "Notification-Priority"
NOTIFICATION_COALESCING_ID = "Notification-Coalescing-ID"

CALLBACK_TARGET = "Notification-Callback-Target"
CALLBACK_CONTEXT = "Notification-Callback-Context"
CALLBACK_CONTEXT_TYPE = "Notification-Callback-Context-Type"
CALLBACK_RESULT = "Notification-Callback-Result"
CALLBACK_TIMESTAMP = "Notification-Callback-Timestamp"

ERROR_CODE = "Error-Code"
ERROR_DESCRIPTION = "Error-Description"

# Resource block headers
IDENTIFIER = "Identifier"
LENGTH = "Length"
