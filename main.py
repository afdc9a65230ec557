from escrow_api_client.runner import app

if __name__ == "__main__":
    app(prog_name="escrow-api-test")
