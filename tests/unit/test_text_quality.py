from app.validation.text_quality import JOB_KEYWORDS, MIN_LENGTH, ValidationVerdict, validate

# 10 four-letter words: 49 chars without the period, 50 with it.
FIFTY_CHARS = "Join team role with good code very nice work here."


class TestLengthRule:
    def test_rejects_short_text_with_trimmed_length(self) -> None:
        verdict = validate("   Too short   ")
        assert verdict == ValidationVerdict(
            accepted=False,
            reason=(
                "Job description text must be at least 50 characters long. "
                "Current length: 9 characters"
            ),
        )

    def test_rejects_49_characters(self) -> None:
        text = FIFTY_CHARS[:-1]
        assert len(text) == 49
        verdict = validate(text)
        assert not verdict.accepted
        assert "Current length: 49 characters" in verdict.reason

    def test_accepts_exactly_50_characters(self) -> None:
        assert len(FIFTY_CHARS) == MIN_LENGTH
        assert validate(FIFTY_CHARS).accepted

    def test_measures_length_after_trimming(self) -> None:
        assert validate(f"    {FIFTY_CHARS}    ").accepted
        assert not validate(f"    {FIFTY_CHARS[:-1]}    ").accepted

    def test_empty_text_is_rejected_on_length(self) -> None:
        verdict = validate("")
        assert not verdict.accepted
        assert "Current length: 0 characters" in verdict.reason


class TestContentRules:
    def test_rejects_repeated_characters(self) -> None:
        verdict = validate("aaaaaa job description " * 3)
        assert not verdict.accepted
        assert verdict.reason == (
            "Text contains too many repetitive characters. "
            "Please provide a proper job description."
        )

    def test_five_repeats_are_allowed(self) -> None:
        verdict = validate(f"Hmmmmm {FIFTY_CHARS}")
        assert verdict.accepted

    def test_rejects_excessive_special_characters(self) -> None:
        verdict = validate("Job role " + "#$%&*" * 20)
        assert not verdict.accepted
        assert verdict.reason == (
            "Text contains too many special characters. "
            "Please provide a valid job description."
        )

    def test_rejects_too_few_meaningful_words(self) -> None:
        verdict = validate("Job role: we do it. An ok team, go on. Be at it by me or us now.")
        assert not verdict.accepted
        assert verdict.reason == (
            "Please provide a more detailed job description with proper words."
        )

    def test_rejects_text_without_job_vocabulary(self) -> None:
        verdict = validate(
            "The quick brown fox jumps over the lazy dog while the sun shines "
            "brightly above green hills and calm rivers."
        )
        assert not verdict.accepted
        assert verdict.reason == (
            "Text doesn't appear to be a job description. "
            "Please provide a valid job posting."
        )

    def test_rejects_unpronounceable_text(self) -> None:
        verdict = validate(
            "job bcdfg hjklm npqrs tvwxz bcdfg hjklm npqrs tvwxz bcdfg hjklm npqrs tvwxz"
        )
        assert not verdict.accepted
        assert verdict.reason == (
            "Text appears to be invalid. Please provide a proper job description."
        )

    def test_keyword_match_is_case_insensitive(self) -> None:
        assert validate(FIFTY_CHARS.upper()).accepted


class TestRuleOrder:
    def test_length_reported_before_everything(self) -> None:
        # Also fails repetition.
        verdict = validate("!!!!!!!!")
        assert "at least 50 characters" in verdict.reason

    def test_repetition_reported_before_noise(self) -> None:
        verdict = validate("#######" + "@$%&*" * 10)
        assert "repetitive characters" in verdict.reason

    def test_repetition_reported_before_substance(self) -> None:
        # Fails repetition and has fewer than ten meaningful words.
        verdict = validate("zzzzzzz " + "ab cd. " * 7)
        assert "repetitive characters" in verdict.reason

    def test_noise_reported_before_substance(self) -> None:
        # Only two-letter words, and 20 of 59 characters are noise.
        verdict = validate("ok #$ " * 10)
        assert "special characters" in verdict.reason

    def test_substance_reported_before_relevance(self) -> None:
        text = "The fox ran. A dog sat on a big mat. It is so hot. We go up to it now."
        assert not any(keyword in text.lower() for keyword in JOB_KEYWORDS)

        verdict = validate(text)

        assert verdict.reason == (
            "Please provide a more detailed job description with proper words."
        )

    def test_relevance_reported_before_gibberish(self) -> None:
        # Twelve vowel-less words.
        text = "bcdfg hjklm npqrs tvwxz " * 3
        assert not any(keyword in text.lower() for keyword in JOB_KEYWORDS)

        verdict = validate(text)

        assert verdict.reason == (
            "Text doesn't appear to be a job description. "
            "Please provide a valid job posting."
        )


class TestThresholds:
    def test_noise_at_exactly_thirty_percent_is_accepted(self) -> None:
        text = FIFTY_CHARS + " " + "#$%&*" * 6 + " and more work here"
        assert len(text) == 100

        assert validate(text).accepted

    def test_noise_above_thirty_percent_is_rejected(self) -> None:
        text = FIFTY_CHARS + " " + "#$%&*" * 6 + "# and more work now"
        assert len(text) == 100

        verdict = validate(text)

        assert "special characters" in verdict.reason

    def test_vowel_ratio_of_exactly_one_fifth_is_accepted(self) -> None:
        # 9 vowels against 45 consonants.
        text = "job xyz " + " ".join(["bcdfga"] * 8)

        assert validate(text).accepted

    def test_vowel_ratio_below_one_fifth_is_rejected(self) -> None:
        # 8 vowels against 46 consonants.
        text = "job xyz " + " ".join(["bcdfga"] * 7 + ["bcdfgh"])

        verdict = validate(text)

        assert verdict.reason == (
            "Text appears to be invalid. Please provide a proper job description."
        )


class TestAcceptance:
    def test_accepts_realistic_posting(self, job_description: str) -> None:
        verdict = validate(job_description)
        assert verdict.accepted
        assert verdict.reason == ""

    def test_keyword_list_is_stable(self) -> None:
        assert len(JOB_KEYWORDS) == 32
        assert "responsibilities" in JOB_KEYWORDS
        assert "cv" in JOB_KEYWORDS
