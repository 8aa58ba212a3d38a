from commonkit.rocketmq.message import MSG_BODY_FOR_CREATE_TOPIC, Message, MessageExt


def test_message_str_full():
    msg = Message(
        topic="t",
        tags="tag",
        keys=["k1", "k2"],
        body=b"hi",
        properties={"b": "2", "a": "1"},
    )
    assert str(msg) == (
        "[rocketrmq]Topic: t, tags: tag, keys: [k1 k2], body: hi, property: map[a:1 b:2]."
    )


def test_message_str_empty():
    assert str(Message()) == "[rocketrmq]Topic: , tags: , keys: [], body: , property: map[]."


def test_message_str_contains_body_text():
    msg = Message(topic="orders", body="测试".encode("utf-8"))
    text = str(msg)
    assert text.startswith("[rocketrmq]Topic: orders, tags: ")
    assert "body: 测试" in text


def test_create_topic_marker():
    marker = Message(topic="x", body=MSG_BODY_FOR_CREATE_TOPIC.encode("utf-8"))
    assert marker.is_create_topic() is True
    assert Message(topic="x", body=b"payload").is_create_topic() is False


def test_message_ext_str_embeds_message():
    ext = MessageExt(
        topic="t",
        tags="tag",
        body=b"data",
        msg_id="mid",
        offset_msg_id="oid",
        store_size=10,
        queue_offset=3,
        born_host="host-a",
        store_host="host-b",
        reconsume_times=2,
    )
    text = str(ext)
    base = str(Message(topic="t", tags="tag", body=b"data"))
    assert text.startswith("[rocketrmq]Message=" + base + ", MsgId=mid, OffsetMsgId=oid")
    assert "StoreSize=10, QueueOffset=3, SysFlag=0" in text
    assert "BornHost='host-a'" in text
    assert "StoreHost='host-b'" in text
    assert "ReconsumeTimes=2" in text
    assert text.endswith("PreparedTransactionOffset=0.")


def test_message_ext_is_message():
    ext = MessageExt(topic="t", keys=["a"])
    assert isinstance(ext, Message)
    assert ext.keys == ["a"]
    assert ext.is_create_topic() is False


def test_default_collections_not_shared():
    first = Message()
    second = Message()
    first.keys.append("k")
    first.properties["p"] = "v"
    assert second.keys == []
    assert second.properties == {}