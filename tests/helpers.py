def upload(client, content=b"\x89PNG fake", filename="cat.png", caption="hello"):
    data = {"caption": caption} if caption is not None else {}
    return client.post("/posts", files={"image": (filename, content, "image/png")}, data=data)
