"""Event names dispatched to lifecycle observers."""

# Application
DID_FINISH_LAUNCHING = "didFinishLaunching"
DID_BECOME_ACTIVE = "didBecomeActive"
WILL_RESIGN_ACTIVE = "willResignActive"
DID_ENTER_BACKGROUND = "didEnterBackground"
WILL_ENTER_FOREGROUND = "willEnterForeground"
WILL_TERMINATE = "willTerminate"

APPLICATION_EVENTS = (
    DID_FINISH_LAUNCHING,
    DID_BECOME_ACTIVE,
    WILL_RESIGN_ACTIVE,
    DID_ENTER_BACKGROUND,
    WILL_ENTER_FOREGROUND,
    WILL_TERMINATE,
)

# Screen
LOAD = "load"
WILL_APPEAR = "willAppear"
DID_APPEAR = "didAppear"
WILL_DISAPPEAR = "willDisappear"
DID_DISAPPEAR = "didDisappear"
DESTROY = "destroy"

SCREEN_EVENTS = (LOAD, WILL_APPEAR, DID_APPEAR, WILL_DISAPPEAR, DID_DISAPPEAR, DESTROY)

# Scene (shares the foreground/background names with the application)
WILL_CONNECT = "willConnect"
DID_DISCONNECT = "didDisconnect"

SCENE_EVENTS = (
    WILL_CONNECT,
    DID_BECOME_ACTIVE,
    WILL_RESIGN_ACTIVE,
    DID_ENTER_BACKGROUND,
    WILL_ENTER_FOREGROUND,
    DID_DISCONNECT,
)
