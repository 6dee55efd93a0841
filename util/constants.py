class InternalURIs:
    HEALTHZ = "/healthz"
    SEND = "/send/{token}"
    SEE = "/see/{token}"
    API = "/api"
    V1 = API + "/v1"
    TASKS = V1 + "/tasks/{token}"
