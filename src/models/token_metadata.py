from pydantic import BaseModel, Field


class TokenMetadata(BaseModel):
    """Creation arguments for a token.

    Only team_name and symbol end up in the TokenAccount; description and
    image_uri are kept by the metadata store, outside the ledger.
    """

    team_name: str = Field(description="Team name (at most 50 bytes once encoded)")
    symbol: str = Field(description="Ticker symbol (at most 10 bytes once encoded)")
    description: str = Field(default="", description="Free-form token description")
    image_uri: str = Field(default="", description="Token image URI")
