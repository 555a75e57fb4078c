from pydantic import EmailStr,BaseModel

class AdminLoginRequest(BaseModel):

    email: EmailStr
    password: str


class RefreshRequest(BaseModel):

    refresh_token: str
